"""Item contract: validation, repository and dispatch.

Exports:
    Dispatcher      -- Routes (function, args) to the repository and
                       returns a Response envelope.
    ItemRepository  -- create / update_price / soft_delete / query / history
                       against a LedgerStore.
    OPERATIONS      -- Dispatch table, keyed by operation name and alias.
    build_dispatcher -- Wire a Dispatcher over a LedgerStore.
"""

from __future__ import annotations

from itemledger.contract.dispatcher import OPERATIONS, Dispatcher
from itemledger.contract.repository import ItemRepository
from itemledger.ledger.store import LedgerStore

__all__ = ["Dispatcher", "ItemRepository", "OPERATIONS", "build_dispatcher"]


def build_dispatcher(store: LedgerStore) -> Dispatcher:
    return Dispatcher(ItemRepository(store))
