"""Varint and length-prefixed byte encodings used by the node formats."""

from __future__ import annotations

MAX_VARINT_LEN64 = 10

_UINT64_LIMIT = 1 << 64
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_MAX_LENGTH = (1 << 63) - 1


class DecodeError(ValueError):
    """Raised when a byte string cannot be decoded.

    ``consumed`` holds the number of input bytes that were read before the
    failure was detected.
    """

    def __init__(self, message: str, consumed: int = 0) -> None:
        super().__init__(message)
        self.consumed = consumed


def _read_uvarint(bz: bytes, kind: str) -> tuple[int, int]:
    value = 0
    shift = 0
    for index, byte in enumerate(bz):
        if index == MAX_VARINT_LEN64:
            raise DecodeError(f"EOF decoding {kind}", consumed=index + 1)
        if byte < 0x80:
            if index == MAX_VARINT_LEN64 - 1 and byte > 1:
                raise DecodeError(f"EOF decoding {kind}", consumed=index + 1)
            return value | (byte << shift), index + 1
        value |= (byte & 0x7F) << shift
        shift += 7
    raise DecodeError("buffer too small", consumed=0)


def decode_uvarint(bz: bytes) -> tuple[int, int]:
    """Decode an unsigned varint, returning the value and the bytes read."""
    return _read_uvarint(bz, "uvarint")


def decode_varint(bz: bytes) -> tuple[int, int]:
    """Decode a zig-zag signed varint, returning the value and the bytes read."""
    ux, n = _read_uvarint(bz, "varint")
    value = ux >> 1
    if ux & 1:
        value = ~value
    return value, n


def decode_bytes(bz: bytes) -> tuple[bytes, int]:
    """Decode a varint length-prefixed byte string.

    Returns the payload and the total number of input bytes read.
    """
    size, n = decode_uvarint(bz)
    if size >= _MAX_LENGTH:
        raise DecodeError(
            f"invalid out of range length {size} decoding bytes", consumed=n
        )
    end = n + size
    if len(bz) < end:
        raise DecodeError(
            f"insufficient bytes decoding bytes of length {size}", consumed=n
        )
    return bytes(bz[n:end]), end


def encode_uvarint(u: int) -> bytes:
    """Encode an unsigned 64-bit integer as a varint."""
    if not 0 <= u < _UINT64_LIMIT:
        raise ValueError(f"value {u} out of range for uint64")
    out = bytearray()
    while u >= 0x80:
        out.append((u & 0x7F) | 0x80)
        u >>= 7
    out.append(u)
    return bytes(out)


def _zigzag(i: int) -> int:
    if not _INT64_MIN <= i <= _INT64_MAX:
        raise ValueError(f"value {i} out of range for int64")
    return i << 1 if i >= 0 else ~(i << 1)


def encode_varint(i: int) -> bytes:
    """Encode a signed 64-bit integer as a zig-zag varint."""
    return encode_uvarint(_zigzag(i))


def encode_bytes(bz: bytes) -> bytes:
    """Return ``bz`` prefixed with its length as a varint."""
    return encode_uvarint(len(bz)) + bytes(bz)


def encode_32bytes_hash(bz: bytes) -> bytes:
    """Encode a 32-byte hash with its fixed one-byte length prefix."""
    return encode_uvarint(32) + bytes(bz)


def encode_uvarint_size(u: int) -> int:
    """Return the number of bytes ``u`` takes as a varint."""
    if u == 0:
        return 1
    return (u.bit_length() + 6) // 7


def encode_varint_size(i: int) -> int:
    """Return the number of bytes ``i`` takes as a zig-zag varint."""
    return encode_uvarint_size(_zigzag(i))


def encode_bytes_size(bz: bytes) -> int:
    """Return the size of ``bz`` once length-prefixed."""
    return encode_uvarint_size(len(bz)) + len(bz)