"""Common time utilities."""

from __future__ import annotations

import datetime as dt
import re

DISPLAY_FORMAT = "%Y-%m-%d %H:%M UTC"

# Extended ISO-8601 instant: date, "T", time with seconds, then "Z" or an offset.
_INSTANT_PATTERN = re.compile(
    r"(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d{1,9}))?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2})"
)


def utcnow() -> dt.datetime:
    """Return an aware UTC timestamp."""
    return dt.datetime.now(dt.UTC)


def parse_github_datetime(value: str) -> dt.datetime:
    """Parse a GitHub ISO-8601 instant into an aware UTC datetime.

    Only the extended ``YYYY-MM-DDTHH:MM:SS[.fff](Z|+HH:MM)`` form is
    accepted; week dates, the basic format and surrounding whitespace are
    rejected.

    Raises
    ------
    ValueError
        If ``value`` is not an ISO-8601 instant.

    """
    match = _INSTANT_PATTERN.fullmatch(value)
    if match is None:
        msg = f"GitHub datetime is not an ISO-8601 instant: {value!r}"
        raise ValueError(msg)
    fraction = match["fraction"]
    offset = match["offset"]
    text = "".join(
        (
            match["base"],
            f".{fraction[:6].ljust(6, '0')}" if fraction else "",
            "+00:00" if offset == "Z" else offset,
        )
    )
    return dt.datetime.fromisoformat(text).astimezone(dt.UTC)


def format_event_timestamp(value: str | None) -> str:
    """Render an event timestamp as ``YYYY-MM-DD HH:MM UTC``.

    Absent values render as an empty string and unparseable values are
    returned unchanged.

    >>> format_event_timestamp("2024-01-02T03:04:05Z")
    '2024-01-02 03:04 UTC'
    >>> format_event_timestamp("not-a-date")
    'not-a-date'
    """
    if value is None:
        return ""
    try:
        return parse_github_datetime(value).strftime(DISPLAY_FORMAT)
    except (ValueError, OverflowError):
        return value
