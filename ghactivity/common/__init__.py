"""Shared helpers used across ghactivity packages."""
