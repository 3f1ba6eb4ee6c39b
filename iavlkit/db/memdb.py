"""An in-memory, sorted key-value store with batches and range iterators."""

from __future__ import annotations

import threading
from enum import Enum

from sortedcontainers import SortedDict

from iavlkit.db.types import (
    Batch,
    BatchClosedError,
    InvalidIteratorError,
    Iterator,
    KeyEmptyError,
    ValueNilError,
)


def _check_range(start: bytes | None, end: bytes | None) -> None:
    if (start is not None and len(start) == 0) or (end is not None and len(end) == 0):
        raise KeyEmptyError()


class MemDB:
    """A key-value store kept in memory, ordered by key.

    Keys and values are byte strings; keys may not be empty and values may
    not be ``None``.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._data: SortedDict = SortedDict()

    def get(self, key: bytes) -> bytes | None:
        """Return the value at ``key``, or ``None`` if it is absent."""
        if not key:
            raise KeyEmptyError()
        with self._lock:
            return self._data.get(bytes(key))

    def has(self, key: bytes) -> bool:
        """Return whether ``key`` is present."""
        if not key:
            raise KeyEmptyError()
        with self._lock:
            return bytes(key) in self._data

    def set(self, key: bytes, value: bytes) -> None:
        """Store ``value`` at ``key``."""
        if not key:
            raise KeyEmptyError()
        if value is None:
            raise ValueNilError()
        with self._lock:
            self._set(key, value)

    def _set(self, key: bytes, value: bytes) -> None:
        self._data[bytes(key)] = bytes(value)

    def set_sync(self, key: bytes, value: bytes) -> None:
        """Same as :meth:`set`; there is nothing to flush in memory."""
        self.set(key, value)

    def delete(self, key: bytes) -> None:
        """Remove ``key`` if present."""
        if not key:
            raise KeyEmptyError()
        with self._lock:
            self._delete(key)

    def _delete(self, key: bytes) -> None:
        self._data.pop(bytes(key), None)

    def delete_sync(self, key: bytes) -> None:
        """Same as :meth:`delete`."""
        self.delete(key)

    def close(self) -> None:
        """Do nothing: closing must not lose the in-memory contents."""

    def print(self) -> None:
        """Print every entry as hex, in key order."""
        with self._lock:
            for key, value in self._data.items():
                print(f"[{key.hex().upper()}]:\t[{value.hex().upper()}]")

    def stats(self) -> dict[str, str]:
        """Return a description of the store."""
        with self._lock:
            return {
                "database.type": "memDB",
                "database.size": str(len(self._data)),
            }

    def new_batch(self) -> MemDBBatch:
        """Create a batch of writes against this store."""
        return MemDBBatch(self)

    def new_batch_with_size(self, size: int) -> MemDBBatch:
        """Create a batch; the size hint is ignored."""
        return MemDBBatch(self)

    def iterator(
        self, start: bytes | None = None, end: bytes | None = None
    ) -> MemDBIterator:
        """Iterate keys in ``[start, end)`` in ascending order.

        ``None`` leaves the range open on that side.
        """
        _check_range(start, end)
        return MemDBIterator(self._snapshot(start, end, reverse=False), start, end)

    def reverse_iterator(
        self, start: bytes | None = None, end: bytes | None = None
    ) -> MemDBIterator:
        """Iterate keys in ``[start, end)`` in descending order."""
        _check_range(start, end)
        return MemDBIterator(self._snapshot(start, end, reverse=True), start, end)

    def _snapshot(
        self, start: bytes | None, end: bytes | None, reverse: bool
    ) -> list[tuple[bytes, bytes]]:
        with self._lock:
            keys = self._data.irange(
                minimum=None if start is None else bytes(start),
                maximum=None if end is None else bytes(end),
                inclusive=(True, False),
                reverse=reverse,
            )
            return [(key, self._data[key]) for key in keys]


class MemDBIterator(Iterator):
    """An iterator over a snapshot of a :class:`MemDB` key range."""

    def __init__(
        self,
        items: list[tuple[bytes, bytes]],
        start: bytes | None,
        end: bytes | None,
    ) -> None:
        self._items = items
        self._position = 0
        self._start = start
        self._end = end

    def domain(self) -> tuple[bytes | None, bytes | None]:
        return self._start, self._end

    def valid(self) -> bool:
        return self._position < len(self._items)

    def _assert_valid(self) -> None:
        if not self.valid():
            raise InvalidIteratorError()

    def next(self) -> None:
        self._assert_valid()
        self._position += 1

    def key(self) -> bytes:
        self._assert_valid()
        return self._items[self._position][0]

    def value(self) -> bytes:
        self._assert_valid()
        return self._items[self._position][1]

    def error(self) -> Exception | None:
        return None

    def close(self) -> None:
        self._items = []
        self._position = 0


class _OpType(Enum):
    SET = 1
    DELETE = 2


class MemDBBatch(Batch):
    """Writes queued for a :class:`MemDB`, applied together on :meth:`write`."""

    def __init__(self, db: MemDB) -> None:
        self._db = db
        self._ops: list[tuple[_OpType, bytes, bytes | None]] | None = []
        self._size = 0

    def set(self, key: bytes, value: bytes) -> None:
        if not key:
            raise KeyEmptyError()
        if value is None:
            raise ValueNilError()
        if self._ops is None:
            raise BatchClosedError()
        self._size += len(key) + len(value)
        self._ops.append((_OpType.SET, bytes(key), bytes(value)))

    def delete(self, key: bytes) -> None:
        if not key:
            raise KeyEmptyError()
        if self._ops is None:
            raise BatchClosedError()
        self._size += len(key)
        self._ops.append((_OpType.DELETE, bytes(key), None))

    def write(self) -> None:
        if self._ops is None:
            raise BatchClosedError()
        with self._db._lock:
            for op, key, value in self._ops:
                if op is _OpType.SET:
                    self._db._set(key, value)
                else:
                    self._db._delete(key)
        self.close()

    def write_sync(self) -> None:
        self.write()

    def close(self) -> None:
        self._ops = None
        self._size = 0

    def byte_size(self) -> int:
        if self._ops is None:
            raise BatchClosedError()
        return self._size