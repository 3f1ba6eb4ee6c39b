"""A batch that flushes itself to the store once it grows past a threshold."""

from __future__ import annotations

import threading
from typing import Any

from iavlkit.db.types import Batch

# Some batch implementations grow by more than the key and value lengths;
# this over-accounts for that when checking the threshold.
_ENTRY_OVERHEAD = 100


class BatchWithFlusher(Batch):
    """Wraps a store's batch, writing it out whenever it would exceed a size limit."""

    def __init__(self, db: Any, flush_threshold: int) -> None:
        self._lock = threading.Lock()
        self._db = db
        self._flush_threshold = flush_threshold
        self._batch = db.new_batch_with_size(flush_threshold)

    def _estimate_size_after_setting(self, key: bytes, value: bytes) -> int:
        return self._batch.byte_size() + len(key) + len(value) + _ENTRY_OVERHEAD

    def _flush(self, sync: bool) -> None:
        if sync:
            self._batch.write_sync()
        else:
            self._batch.write()
        self._batch.close()
        self._batch = self._db.new_batch_with_size(self._flush_threshold)

    def set(self, key: bytes, value: bytes) -> None:
        """Queue a write, flushing first if it would push the batch over the limit."""
        with self._lock:
            if self._estimate_size_after_setting(key, value) > self._flush_threshold:
                self._flush(sync=False)
            self._batch.set(key, value)

    def delete(self, key: bytes) -> None:
        """Queue a deletion, flushing first if it would push the batch over the limit."""
        with self._lock:
            if self._estimate_size_after_setting(key, b"") > self._flush_threshold:
                self._flush(sync=False)
            self._batch.delete(key)

    def write(self) -> None:
        """Write the queued operations and start a fresh batch."""
        with self._lock:
            self._flush(sync=False)

    def write_sync(self) -> None:
        """Write the queued operations durably and start a fresh batch."""
        with self._lock:
            self._flush(sync=True)

    def close(self) -> None:
        """Discard the current batch."""
        with self._lock:
            self._batch.close()

    def byte_size(self) -> int:
        """Return the size of the operations queued since the last flush."""
        return self._batch.byte_size()