"""A bytes type that renders and serialises as upper-case hexadecimal."""

from __future__ import annotations

import binascii


class HexBytes(bytes):
    """Bytes that print and JSON-encode as upper-case hex."""

    def to_json(self) -> str:
        """Return the JSON string literal holding the upper-case hex form."""
        return f'"{self.hex().upper()}"'

    @classmethod
    def from_json(cls, data: str | bytes) -> HexBytes:
        """Parse a JSON string literal holding hex digits."""
        if isinstance(data, (bytes, bytearray)):
            data = bytes(data).decode("ascii", errors="replace")
        if len(data) < 2 or data[0] != '"' or data[-1] != '"':
            raise ValueError(f"invalid hex string: {data}")
        return cls(binascii.unhexlify(data[1:-1]))

    def __str__(self) -> str:
        return self.hex().upper()

    def __repr__(self) -> str:
        return f"HexBytes({self.hex().upper()!r})"

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


def cp_incr(bz: bytes) -> bytes | None:
    """Return ``bz`` incremented by one as a big-endian number.

    Returns ``None`` on overflow, i.e. when every byte is 0xFF.
    """
    if len(bz) == 0:
        raise ValueError("cp_incr expects a non-empty byte string")
    out = bytearray(bz)
    for index in reversed(range(len(out))):
        if out[index] < 0xFF:
            out[index] += 1
            return bytes(out)
        out[index] = 0x00
    return None