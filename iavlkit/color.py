"""ANSI colouring helpers for rendering keys and values."""

from __future__ import annotations

import os
from typing import Any, Callable

ANSI_RESET = "\x1b[0m"
ANSI_BRIGHT = "\x1b[1m"

ANSI_FG_GREEN = "\x1b[32m"
ANSI_FG_BLUE = "\x1b[34m"
ANSI_FG_CYAN = "\x1b[36m"

COLORS_ENV_VAR = "TENDERMINT_IAVL_COLORS_ON"

_ESCAPE_START = "\x1b["


def _treat(text: str, color: str) -> str:
    """Colour ``text`` unless it already starts with an escape sequence."""
    if len(text) > 2 and text.startswith(_ESCAPE_START):
        return text
    return color + text + ANSI_RESET


def _treat_all(color: str, args: tuple[Any, ...]) -> str:
    return "".join(_treat(str(arg), color) for arg in args)


def green(*args: Any) -> str:
    """Render each argument in green and join them."""
    return _treat_all(ANSI_FG_GREEN, args)


def blue(*args: Any) -> str:
    """Render each argument in blue and join them."""
    return _treat_all(ANSI_FG_BLUE, args)


def cyan(*args: Any) -> str:
    """Render each argument in cyan and join them."""
    return _treat_all(ANSI_FG_CYAN, args)


def colored_bytes(
    data: bytes,
    text_color: Callable[..., str],
    bytes_color: Callable[..., str],
) -> str:
    """Render ``data`` with printable bytes and other bytes in different colours.

    Colouring only happens when the environment variable named by
    ``COLORS_ENV_VAR`` is set to a non-empty string; otherwise the data is
    returned as plain text.
    """
    if not os.environ.get(COLORS_ENV_VAR, ""):
        return bytes(data).decode("utf-8", errors="replace")
    parts = []
    for byte in data:
        if 0x21 <= byte < 0x7F:
            parts.append(text_color(chr(byte)))
        else:
            parts.append(bytes_color(f"{byte:02X}"))
    return "".join(parts)