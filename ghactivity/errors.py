"""Process-level errors and exit codes for the command-line tool."""

from __future__ import annotations

import enum


class ExitCode(enum.IntEnum):
    """Exit statuses returned by :func:`ghactivity.cli.main`."""

    OK = 0
    API_ERROR = 1
    NETWORK_ERROR = 2
    PARSE_ERROR = 3
    USAGE = 64  # EX_USAGE from sysexits.h


class UsageError(ValueError):
    """Raised when the command line cannot be interpreted."""

    @classmethod
    def missing_username(cls) -> UsageError:
        """Return an error for an absent or blank username."""
        return cls("username is required")
