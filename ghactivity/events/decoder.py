"""Decode raw activity feed JSON into :class:`NormalizedEvent` records.

GitHub payloads vary by event type and fields go missing often enough that
every read here is an optional lookup. The helpers return ``None`` for
missing or mistyped values so callers can substitute display defaults.
"""

from __future__ import annotations

import typing as typ

from ghactivity.common.time import format_event_timestamp

from .models import UNKNOWN_EVENT_TYPE, UNKNOWN_REPO_NAME, NormalizedEvent


def get_nested(data: object, *keys: str) -> object:
    """Traverse a nested dict path, returning ``None`` for missing keys."""
    current: object = data
    for key in keys:
        if not isinstance(current, dict):
            return None
        current_dict = typ.cast("dict[str, object]", current)
        current = current_dict.get(key)
    return current


def scalar_text(value: object) -> str | None:
    """Return JSON scalars as display text; ``None`` for null and containers.

    >>> scalar_text(42)
    '42'
    >>> scalar_text(True)
    'true'
    >>> scalar_text({"a": 1}) is None
    True
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int | float):
        return str(value)
    return None


def text_field(data: object, *keys: str) -> str | None:
    """Return the text at ``keys`` or ``None`` when absent or not a scalar."""
    return scalar_text(get_nested(data, *keys))


def array_length(data: object, *keys: str) -> int | None:
    """Return the length of the array at ``keys``, ``None`` for non-arrays."""
    value = get_nested(data, *keys)
    if isinstance(value, list):
        return len(value)
    return None


def is_true(data: object, *keys: str) -> bool:
    """Return ``True`` only when ``keys`` resolves to a JSON ``true``."""
    return get_nested(data, *keys) is True


def decode_event(raw: object) -> NormalizedEvent:
    """Build a :class:`NormalizedEvent` from one raw feed entry.

    Never raises: anything that is not an object decodes to an event made
    entirely of defaults.
    """
    event_type = text_field(raw, "type")
    repo_name = text_field(raw, "repo", "name")
    payload = get_nested(raw, "payload")
    return NormalizedEvent(
        event_type=UNKNOWN_EVENT_TYPE if event_type is None else event_type,
        repo_name=UNKNOWN_REPO_NAME if repo_name is None else repo_name,
        created_at_display=format_event_timestamp(text_field(raw, "created_at")),
        payload=typ.cast("dict[str, typ.Any]", payload)
        if isinstance(payload, dict)
        else None,
    )
