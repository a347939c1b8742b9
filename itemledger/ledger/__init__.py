"""Ledger substrate for itemledger.

The contract only ever talks to a ``LedgerStore``: point reads and writes
by key plus an append-only, per-key modification history.

Submodules:
    store   -- LedgerStore and HistoryIterator protocols.
    memory  -- Thread-safe in-memory substrate used by the server and tests.
"""

from itemledger.ledger.memory import InMemoryLedgerStore
from itemledger.ledger.store import HistoryIterator, LedgerStore

__all__ = ["HistoryIterator", "InMemoryLedgerStore", "LedgerStore"]
