"""Typed records for GitHub activity feed events."""

from __future__ import annotations

import typing as typ

import msgspec

UNKNOWN_EVENT_TYPE = "Event"
UNKNOWN_REPO_NAME = "unknown/repo"


class NormalizedEvent(msgspec.Struct, kw_only=True, frozen=True):
    """Default-filled view of one activity feed event.

    Attributes
    ----------
    event_type : str
        GitHub event type tag such as ``PushEvent``. Events without a type
        carry ``"Event"``.
    repo_name : str
        ``owner/name`` of the repository, ``"unknown/repo"`` when absent.
    created_at_display : str
        Display timestamp, the raw value when it could not be parsed, or an
        empty string when the event carries no timestamp.
    payload : dict[str, Any] | None
        Type-specific payload object, ``None`` when absent or not an object.

    """

    event_type: str = UNKNOWN_EVENT_TYPE
    repo_name: str = UNKNOWN_REPO_NAME
    created_at_display: str = ""
    payload: dict[str, typ.Any] | None = None
