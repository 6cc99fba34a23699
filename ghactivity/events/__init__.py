"""Activity feed event decoding and rendering."""

from __future__ import annotations

from .colors import RESET, Color, colorize, should_use_color
from .decoder import decode_event
from .formatter import (
    capitalize_first,
    describe_event,
    get_event_describer,
    registered_event_types,
)
from .models import NormalizedEvent

__all__ = [
    "RESET",
    "Color",
    "NormalizedEvent",
    "capitalize_first",
    "colorize",
    "decode_event",
    "describe_event",
    "get_event_describer",
    "registered_event_types",
    "should_use_color",
]
