"""Compression of exported node streams.

Branch keys are dropped, leaf keys are delta-encoded against the previous
leaf, and branch versions are stored relative to the larger of their
children's versions.
"""

from __future__ import annotations

import dataclasses
from typing import Any

from iavlkit.encoding import DecodeError, decode_uvarint, encode_uvarint
from iavlkit.export import ExportDone, ExportNode


def diff_offset(a: bytes, b: bytes) -> int:
    """Return the index of the first byte at which ``a`` and ``b`` differ."""
    offset = 0
    for x, y in zip(a, b):
        if x != y:
            break
        offset += 1
    return offset


def delta_encode(key: bytes, last_key: bytes | None) -> bytes:
    """Encode ``key`` as the length shared with ``last_key`` plus the rest."""
    shared = diff_offset(last_key or b"", key)
    return encode_uvarint(shared) + bytes(key[shared:])


def delta_decode(key: bytes, last_key: bytes | None) -> bytes:
    """Rebuild a key produced by :func:`delta_encode`."""
    try:
        shared, n = decode_uvarint(key)
    except DecodeError as exc:
        raise DecodeError(f"uvarint parse failed: {exc}", exc.consumed) from exc
    rest = bytes(key[n:])
    if shared == 0:
        return rest
    last_key = last_key or b""
    if shared > len(last_key):
        raise DecodeError(
            f"shared length {shared} exceeds previous key length {len(last_key)}",
            n,
        )
    return bytes(last_key[:shared]) + rest


def _pop_max_version(stack: list[int]) -> int:
    if len(stack) < 2:
        raise ValueError("invalid node structure: branch node without two children")
    max_version = max(stack[-1], stack[-2])
    stack.pop()
    return max_version


class CompressExporter:
    """Wraps an exporter and compresses the nodes it yields."""

    def __init__(self, exporter: Any) -> None:
        self._inner = exporter
        self._last_key: bytes | None = None
        self._version_stack: list[int] = []

    def next(self) -> ExportNode:
        """Return the next compressed node; raises :class:`ExportDone` at the end."""
        node = self._inner.next()
        if node.height == 0:
            encoded = delta_encode(node.key, self._last_key)
            self._last_key = node.key
            self._version_stack.append(node.version)
            return dataclasses.replace(node, key=encoded)
        max_version = _pop_max_version(self._version_stack)
        self._version_stack[-1] = node.version
        return dataclasses.replace(node, key=None, version=node.version - max_version)

    def __iter__(self) -> CompressExporter:
        return self

    def __next__(self) -> ExportNode:
        try:
            return self.next()
        except ExportDone:
            raise StopIteration from None


class CompressImporter:
    """Wraps an importer and decompresses nodes before handing them on."""

    def __init__(self, importer: Any) -> None:
        self._inner = importer
        self._last_key: bytes | None = None
        self._min_key_stack: list[bytes] = []
        self._version_stack: list[int] = []

    def add(self, node: ExportNode) -> None:
        """Decompress ``node`` and add it to the wrapped importer."""
        if node.height == 0:
            key = delta_decode(node.key or b"", self._last_key)
            self._last_key = key
            self._min_key_stack.append(key)
            self._version_stack.append(node.version)
            restored = dataclasses.replace(node, key=key)
        else:
            if len(self._min_key_stack) < 2:
                raise ValueError(
                    "invalid node structure: branch node without two children"
                )
            # The branch key is the smallest key of its right subtree; the
            # left subtree's smallest key stays on the stack for the parent.
            key = self._min_key_stack.pop()
            max_version = _pop_max_version(self._version_stack)
            version = node.version + max_version
            self._version_stack[-1] = version
            restored = dataclasses.replace(node, key=key, version=version)
        self._inner.add(restored)