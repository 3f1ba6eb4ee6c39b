"""A logical key-value store living under a key prefix of another store."""

from __future__ import annotations

import threading
from typing import Any

from iavlkit.db.types import (
    Batch,
    DBError,
    InvalidIteratorError,
    Iterator,
    KeyEmptyError,
    ValueNilError,
)
from iavlkit.hexbytes import cp_incr


def _check_key(key: bytes) -> None:
    if not key:
        raise KeyEmptyError("key is empty")


def _check_range(start: bytes | None, end: bytes | None) -> None:
    if (start is not None and len(start) == 0) or (end is not None and len(end) == 0):
        raise KeyEmptyError("key is empty")


class PrefixDB:
    """Namespaces a store: every key is stored under ``prefix`` in ``db``."""

    def __init__(self, db: Any, prefix: bytes) -> None:
        self._lock = threading.Lock()
        self.prefix = bytes(prefix)
        self._db = db

    def _prefixed(self, key: bytes) -> bytes:
        return self.prefix + bytes(key)

    def get(self, key: bytes) -> bytes | None:
        """Return the value at ``key``, or ``None`` if absent."""
        _check_key(key)
        return self._db.get(self._prefixed(key))

    def has(self, key: bytes) -> bool:
        """Return whether ``key`` is present."""
        _check_key(key)
        return self._db.has(self._prefixed(key))

    def set(self, key: bytes, value: bytes) -> None:
        """Store ``value`` at ``key``."""
        _check_key(key)
        self._db.set(self._prefixed(key), value)

    def delete(self, key: bytes) -> None:
        """Remove ``key``."""
        _check_key(key)
        self._db.delete(self._prefixed(key))

    def _bounds(
        self, start: bytes | None, end: bytes | None
    ) -> tuple[bytes, bytes | None]:
        pstart = self.prefix + (bytes(start) if start is not None else b"")
        if end is None:
            pend = cp_incr(self.prefix)
        else:
            pend = self.prefix + bytes(end)
        return pstart, pend

    def iterator(
        self, start: bytes | None = None, end: bytes | None = None
    ) -> PrefixIterator:
        """Iterate keys in ``[start, end)`` in ascending order, prefix stripped."""
        _check_range(start, end)
        pstart, pend = self._bounds(start, end)
        source = self._db.iterator(pstart, pend)
        return PrefixIterator(self.prefix, start, end, source)

    def reverse_iterator(
        self, start: bytes | None = None, end: bytes | None = None
    ) -> PrefixIterator:
        """Iterate keys in ``[start, end)`` in descending order, prefix stripped."""
        _check_range(start, end)
        pstart, pend = self._bounds(start, end)
        source = self._db.reverse_iterator(pstart, pend)
        return PrefixIterator(self.prefix, start, end, source)

    def new_batch(self) -> PrefixBatch:
        """Create a batch whose keys are written under the prefix."""
        return PrefixBatch(self.prefix, self._db.new_batch())

    def new_batch_with_size(self, size: int) -> PrefixBatch:
        """Create a batch with a size hint passed to the underlying store."""
        return PrefixBatch(self.prefix, self._db.new_batch_with_size(size))

    def close(self) -> None:
        """Close the underlying store."""
        with self._lock:
            self._db.close()

    def print(self) -> None:
        """Print the prefix and every entry under it as hex."""
        print(f"prefix: {self.prefix.hex().upper()}")
        with self.iterator(None, None) as itr:
            for key, value in itr:
                print(f"[{key.hex().upper()}]:\t[{value.hex().upper()}]")


def iterate_prefix(db: Any, prefix: bytes) -> Iterator:
    """Iterate the entries of ``db`` whose keys start with ``prefix``."""
    if len(prefix) == 0:
        return db.iterator(None, None)
    return db.iterator(bytes(prefix), cp_incr(prefix))


class PrefixIterator(Iterator):
    """Wraps an iterator of the underlying store and strips the prefix."""

    def __init__(
        self,
        prefix: bytes,
        start: bytes | None,
        end: bytes | None,
        source: Iterator,
    ) -> None:
        self._prefix = bytes(prefix)
        self._start = start
        self._end = end
        self._source = source
        self._err: Exception | None = None

        # Empty keys are not allowed, so a key equal to the prefix is skipped.
        if source.valid() and source.key() == self._prefix:
            source.next()
        self._valid = source.valid() and source.key().startswith(self._prefix)

    def domain(self) -> tuple[bytes | None, bytes | None]:
        return self._start, self._end

    def valid(self) -> bool:
        if not self._valid or self._err is not None or not self._source.valid():
            return False
        key = self._source.key()
        if not key.startswith(self._prefix):
            self._err = DBError(
                f"received invalid key from backend: {key.hex()} "
                f"(expected prefix {self._prefix.hex()})"
            )
            return False
        return True

    def _assert_valid(self) -> None:
        if not self.valid():
            raise InvalidIteratorError()

    def next(self) -> None:
        self._assert_valid()
        while True:
            self._source.next()
            if not self._source.valid() or not self._source.key().startswith(
                self._prefix
            ):
                self._valid = False
                return
            if self._source.key() != self._prefix:
                return

    def key(self) -> bytes:
        self._assert_valid()
        return self._source.key()[len(self._prefix):]

    def value(self) -> bytes:
        self._assert_valid()
        return self._source.value()

    def error(self) -> Exception | None:
        err = self._source.error()
        if err is not None:
            return err
        return self._err

    def close(self) -> None:
        self._source.close()


class PrefixBatch(Batch):
    """A batch of the underlying store whose keys get the prefix added."""

    def __init__(self, prefix: bytes, source: Batch | None) -> None:
        self._prefix = bytes(prefix)
        self._source = source

    def set(self, key: bytes, value: bytes) -> None:
        _check_key(key)
        if value is None:
            raise ValueNilError("value is nil")
        self._source.set(self._prefix + bytes(key), value)

    def delete(self, key: bytes) -> None:
        _check_key(key)
        self._source.delete(self._prefix + bytes(key))

    def write(self) -> None:
        self._source.write()

    def write_sync(self) -> None:
        self._source.write_sync()

    def close(self) -> None:
        self._source.close()

    def byte_size(self) -> int:
        if self._source is None:
            raise DBError("source batch is nil")
        return self._source.byte_size()