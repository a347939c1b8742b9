"""LedgerStore protocol - the only interface the contract needs from its substrate."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from itemledger.models.records import KeyModification


@runtime_checkable
class HistoryIterator(Protocol):
    """Single-pass cursor over a key's modifications, most recent first.

    Holds substrate resources until ``close()``; usable as a context manager.
    """

    def __iter__(self) -> Iterator[KeyModification]: ...

    def __next__(self) -> KeyModification: ...

    def __enter__(self) -> HistoryIterator: ...

    def __exit__(self, *exc_info: object) -> None: ...

    def close(self) -> None: ...


@runtime_checkable
class LedgerStore(Protocol):
    """Ordered key-value store with per-key version history.

    Implementations raise ``itemledger.errors.StoreError`` on substrate failure.
    """

    def get(self, key: str) -> bytes | None:
        """Current value for *key*, or None when the key holds nothing."""
        ...

    def put(self, key: str, value: bytes) -> None:
        """Write *value* as the new current value of *key*."""
        ...

    def history_of(self, key: str) -> HistoryIterator:
        """Open a cursor over every past write and delete marker for *key*."""
        ...


__all__ = ["HistoryIterator", "LedgerStore"]
