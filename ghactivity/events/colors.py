"""ANSI colour decoration for terminal output."""

from __future__ import annotations

import enum
import os
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

RESET = "\x1b[0m"


class Color(enum.StrEnum):
    """Semantic colour tags mapped to their ANSI escape sequences."""

    RED = "\x1b[31m"
    CYAN = "\x1b[36m"
    BOLD = "\x1b[1m"
    DIM = "\x1b[2m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"


class _SupportsIsatty(typ.Protocol):
    def isatty(self) -> bool: ...


def colorize(text: str, color: Color, *, enabled: bool) -> str:
    """Wrap ``text`` in the escape sequence for ``color`` when enabled.

    >>> colorize("octo/reef", Color.BOLD, enabled=False)
    'octo/reef'
    """
    if not enabled:
        return text
    return f"{color}{text}{RESET}"


def should_use_color(
    *,
    no_color_flag: bool,
    stream: _SupportsIsatty,
    environ: cabc.Mapping[str, str] | None = None,
) -> bool:
    """Decide whether output written to ``stream`` should be colourised.

    Colour needs an interactive terminal, no ``--no-color`` flag and no
    ``NO_COLOR`` variable in the environment (any value opts out).
    """
    env = os.environ if environ is None else environ
    if no_color_flag or "NO_COLOR" in env:
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty is not None and isatty())
