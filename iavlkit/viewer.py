"""Helpers for rendering stored keys, values and tree shapes as text."""

from __future__ import annotations

from collections import Counter
from typing import Any

_HEX_DIGITS = frozenset(b"0123456789ABCDEF")
_QUOTE_FORCING = frozenset(b' "\\')


def _quote_ascii(src: bytes) -> str:
    """Quote printable ASCII bytes as a double-quoted, escaped string."""
    parts = ['"']
    for byte in src:
        if byte == 0x22:
            parts.append('\\"')
        elif byte == 0x5C:
            parts.append("\\\\")
        elif byte == 0x7F:
            parts.append("\\x7f")
        else:
            parts.append(chr(byte))
    parts.append('"')
    return "".join(parts)


def encode_data(src: bytes) -> str:
    """Return a printable ASCII rendering of ``src``.

    Bytes outside printable ASCII give upper-case hex. Otherwise the text is
    returned as is, or quoted when it could be mistaken for hex or holds a
    space, a double quote or a backslash.
    """
    src = bytes(src)
    hex_confusable = True
    force_quotes = False
    for byte in src:
        if byte < 0x20 or byte >= 0x80:
            return src.hex().upper()
        if byte not in _HEX_DIGITS:
            hex_confusable = False
            if byte in _QUOTE_FORCING:
                force_quotes = True
    if hex_confusable or force_quotes:
        return _quote_ascii(src)
    return src.decode("ascii")


def parse_weave_key(key: bytes) -> str:
    """Render a key, splitting it at the first ``:`` into label and id."""
    key = bytes(key)
    cut = key.find(b":")
    if cut == -1:
        return encode_data(key)
    return f"{encode_data(key[:cut])}:{encode_data(key[cut + 1:])}"


def node_encoder(node_id: bytes | None, depth: int, is_leaf: bool) -> str:
    """Render one node of a tree shape, marking leaves and showing the depth."""
    marker = "*" if is_leaf else "-"
    return f"{marker}{depth} {parse_weave_key(node_id or b'')}"


def print_db_stats(db: Any) -> None:
    """Print the number of entries in ``db`` and a count per first key byte."""
    counts: Counter[bytes] = Counter()
    total = 0
    with db.iterator(None, None) as itr:
        for key, _ in itr:
            counts[bytes(key[:1])] += 1
            total += 1
    print(f"DB contains {total} entries")
    for prefix in sorted(counts):
        print(f"  {prefix.decode('latin-1')}: {counts[prefix]}")