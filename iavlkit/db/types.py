"""Errors and the abstract iterator and batch interfaces of the key-value stores."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Generator
from typing import Any


class DBError(Exception):
    """Base class for key-value store errors."""


class KeyEmptyError(DBError, ValueError):
    """An empty key was given where one is required."""

    def __init__(self, message: str = "key cannot be empty") -> None:
        super().__init__(message)


class ValueNilError(DBError, ValueError):
    """A missing value was given to a write."""

    def __init__(self, message: str = "value cannot be nil") -> None:
        super().__init__(message)


class BatchClosedError(DBError):
    """A batch was used after being written or closed."""

    def __init__(self, message: str = "batch has been written or closed") -> None:
        super().__init__(message)


class InvalidIteratorError(DBError):
    """An iterator was used while not positioned on an item."""

    def __init__(self, message: str = "iterator is invalid") -> None:
        super().__init__(message)


class Iterator(ABC):
    """A cursor over a key range; also a Python iterator of (key, value) pairs."""

    @abstractmethod
    def domain(self) -> tuple[bytes | None, bytes | None]:
        """Return the ``(start, end)`` range the iterator was created with."""

    @abstractmethod
    def valid(self) -> bool:
        """Return whether the iterator is positioned on an item."""

    @abstractmethod
    def next(self) -> None:
        """Move to the next item."""

    @abstractmethod
    def key(self) -> bytes:
        """Return the current key."""

    @abstractmethod
    def value(self) -> bytes:
        """Return the current value."""

    @abstractmethod
    def error(self) -> Exception | None:
        """Return the error that stopped iteration, if any."""

    @abstractmethod
    def close(self) -> None:
        """Release the iterator's resources."""

    def __iter__(self) -> Generator[tuple[bytes, bytes], None, None]:
        while self.valid():
            yield self.key(), self.value()
            self.next()
        err = self.error()
        if err is not None:
            raise err

    def __enter__(self) -> Iterator:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class Batch(ABC):
    """A group of writes applied to a store together."""

    @abstractmethod
    def set(self, key: bytes, value: bytes) -> None:
        """Queue a write of ``value`` at ``key``."""

    @abstractmethod
    def delete(self, key: bytes) -> None:
        """Queue a deletion of ``key``."""

    @abstractmethod
    def write(self) -> None:
        """Apply the queued operations."""

    @abstractmethod
    def write_sync(self) -> None:
        """Apply the queued operations and flush them durably."""

    @abstractmethod
    def close(self) -> None:
        """Discard the batch."""

    @abstractmethod
    def byte_size(self) -> int:
        """Return the approximate size of the queued operations in bytes."""

    def __enter__(self) -> Batch:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()