"""Fast nodes: the latest value of a key with the version it was set at."""

from __future__ import annotations

from dataclasses import dataclass

from iavlkit.encoding import (
    DecodeError,
    decode_bytes,
    decode_varint,
    encode_bytes,
    encode_bytes_size,
    encode_varint,
    encode_varint_size,
)


@dataclass
class FastNode:
    """A key, its current value and the version that last updated it."""

    key: bytes = b""
    version_last_updated_at: int = 0
    value: bytes = b""

    @classmethod
    def deserialize(cls, key: bytes, buf: bytes) -> FastNode:
        """Build a node for ``key`` from its serialised form."""
        try:
            version, n = decode_varint(buf)
        except DecodeError as exc:
            raise DecodeError(
                f"decoding fastnode.version, {exc}", consumed=exc.consumed
            ) from exc
        try:
            value, _ = decode_bytes(buf[n:])
        except DecodeError as exc:
            raise DecodeError(
                f"decoding fastnode.value, {exc}", consumed=n + exc.consumed
            ) from exc
        return cls(key=key, version_last_updated_at=version, value=value)

    def encoded_size(self) -> int:
        """Return the length of the serialised form."""
        return encode_varint_size(self.version_last_updated_at) + encode_bytes_size(
            self.value
        )

    def to_bytes(self) -> bytes:
        """Serialise the version and value (the key is stored separately)."""
        return encode_varint(self.version_last_updated_at) + encode_bytes(self.value)