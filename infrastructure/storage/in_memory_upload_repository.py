"""Session store for user uploads, safe to share between request threads."""
from __future__ import annotations

import threading

from domain.entities import UploadRecord
from domain.interfaces import UploadRepository


class InMemoryUploadRepository(UploadRepository):
    """Upload records guarded by a single lock; never persisted."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, UploadRecord] = {}

    def add(self, record: UploadRecord) -> None:
        with self._lock:
            self._records[record.id] = record

    def snapshot(self) -> list[UploadRecord]:
        with self._lock:
            return list(self._records.values())

    def clear(self) -> None:
        with self._lock:
            self._records = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


__all__ = ["InMemoryUploadRepository"]
