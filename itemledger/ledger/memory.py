"""In-memory ledger substrate.

Keeps the current value of every key plus an append-only log of every
modification (writes and delete markers), each stamped with a transaction
id and a commit timestamp. Safe to share between threads.
"""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Callable
from datetime import UTC, datetime
from uuid import uuid4

import structlog

from itemledger.errors import StoreError
from itemledger.models.records import KeyModification

_log = structlog.get_logger(component="ledger.memory")


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class MemoryHistoryIterator:
    """Cursor over a snapshot of one key's modification log."""

    def __init__(self, key: str, modifications: list[KeyModification]) -> None:
        self._key = key
        # newest first
        self._pending: deque[KeyModification] = deque(reversed(modifications))
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> MemoryHistoryIterator:
        return self

    def __next__(self) -> KeyModification:
        if self._closed:
            raise StoreError(f"History iterator for key '{self._key}' is closed")
        if not self._pending:
            raise StopIteration
        return self._pending.popleft()

    def __enter__(self) -> MemoryHistoryIterator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._closed = True
        self._pending.clear()


class InMemoryLedgerStore:
    """Thread-safe LedgerStore backed by dicts.

    Args:
        clock: Returns the commit timestamp for each modification.
               Defaults to the current UTC time.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or _utcnow
        self._lock = threading.Lock()
        self._state: dict[str, bytes] = {}
        self._history: dict[str, list[KeyModification]] = {}

    def get(self, key: str) -> bytes | None:
        with self._lock:
            return self._state.get(key)

    def put(self, key: str, value: bytes) -> None:
        if not isinstance(value, bytes):
            raise StoreError(f"Value for key '{key}' must be bytes, got {type(value).__name__}")
        with self._lock:
            self._state[key] = value
            self._append(key, value, is_delete=False)

    def delete(self, key: str) -> None:
        """Remove the current value and record a delete marker.

        Deleting a key that holds nothing is a no-op.
        """
        with self._lock:
            if key not in self._state:
                return
            del self._state[key]
            self._append(key, None, is_delete=True)

    def history_of(self, key: str) -> MemoryHistoryIterator:
        with self._lock:
            snapshot = list(self._history.get(key, ()))
        return MemoryHistoryIterator(key, snapshot)

    def _append(self, key: str, value: bytes | None, is_delete: bool) -> None:
        # caller holds self._lock
        mod = KeyModification(
            tx_id=uuid4().hex,
            value=value,
            timestamp=self._clock(),
            is_delete=is_delete,
        )
        self._history.setdefault(key, []).append(mod)
        _log.debug("ledger_modification", key=key, tx_id=mod.tx_id, is_delete=is_delete)
