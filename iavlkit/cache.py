"""A least-recently-used cache of nodes keyed by their byte keys."""

from __future__ import annotations

from collections import OrderedDict
from typing import Protocol


class CacheNode(Protocol):
    """Anything that can be cached: it only needs a byte key."""

    @property
    def key(self) -> bytes: ...


class LRUCache:
    """LRU cache bounded by a maximum number of nodes."""

    def __init__(self, max_element_count: int) -> None:
        self.max_element_count = max_element_count
        self._entries: OrderedDict[bytes, CacheNode] = OrderedDict()

    def add(self, node: CacheNode) -> CacheNode | None:
        """Add ``node`` as most recently used.

        Returns the node it replaced under the same key, or the node evicted
        to stay within the limit, or ``None``.
        """
        key = bytes(node.key)
        if key in self._entries:
            old = self._entries[key]
            self._entries[key] = node
            self._entries.move_to_end(key)
            return old
        self._entries[key] = node
        if len(self._entries) > self.max_element_count:
            _, evicted = self._entries.popitem(last=False)
            return evicted
        return None

    def get(self, key: bytes) -> CacheNode | None:
        """Return the node for ``key``, marking it recently used, or ``None``."""
        key = bytes(key)
        node = self._entries.get(key)
        if node is not None:
            self._entries.move_to_end(key)
        return node

    def has(self, key: bytes) -> bool:
        """Return whether ``key`` is cached, without touching its recency."""
        return bytes(key) in self._entries

    def __contains__(self, key: object) -> bool:
        return isinstance(key, (bytes, bytearray)) and self.has(key)

    def remove(self, key: bytes) -> CacheNode | None:
        """Remove and return the node for ``key``, or ``None`` if absent."""
        return self._entries.pop(bytes(key), None)

    def __len__(self) -> int:
        return len(self._entries)