"""Item repository: the five contract operations against a LedgerStore.

Mutations are read-modify-write of the whole record under a single key.
Nothing is ever physically deleted; ``soft_delete`` writes the record back
with ``state = REMOVED``. Every operation commits exactly one write or none.
"""

from __future__ import annotations

from itemledger.contract.history import to_version
from itemledger.errors import ConflictError, ItemLedgerError, NotFoundError, StoreError
from itemledger.ledger.store import LedgerStore
from itemledger.models.records import REMOVED_STATE, ItemVersion, Record
from itemledger.observability.logging import get_logger

_logger = get_logger("contract.repository")


class ItemRepository:
    """Stateless between calls; all state lives in the ledger."""

    def __init__(self, store: LedgerStore) -> None:
        self._store = store

    def create(self, id: str, name: str, description: str, price: str, state: str) -> bytes:
        """Write a new record. First write wins; an existing key is a conflict."""
        _logger.debug("create start", id=id)
        if self._read(id) is not None:
            _logger.info("item already exists", id=id)
            raise ConflictError(f"An Item already exists for this ID: {id}")

        payload = Record(id=id, name=name, description=description, price=price, state=state).to_json()
        self._write(id, payload)
        _logger.debug("create end", id=id)
        return payload

    def update_price(self, id: str, price: str) -> bytes:
        _logger.debug("update_price start", id=id, price=price)
        record = self._load(id).with_price(price)
        payload = record.to_json()
        self._write(id, payload)
        _logger.debug("update_price end", id=id)
        return payload

    def soft_delete(self, id: str) -> bytes:
        """Mark the record REMOVED. Repeated calls still write a new version."""
        _logger.debug("soft_delete start", id=id)
        current = self._load(id)
        if current.removed:
            _logger.info("item already removed", id=id)
        record = current.with_state(REMOVED_STATE)
        payload = record.to_json()
        self._write(id, payload)
        _logger.debug("soft_delete end", id=id)
        return payload

    def query(self, id: str) -> bytes:
        """Return the stored bytes exactly as written."""
        _logger.debug("query start", id=id)
        raw = self._read(id)
        if raw is None:
            raise NotFoundError(f"An Item does not exist for this ID: {id}")
        _logger.debug("query end", id=id)
        return raw

    def history(self, id: str) -> list[ItemVersion]:
        """Every version of *id*, most recent first, in ledger order.

        The history cursor is closed on every exit path.
        """
        _logger.debug("history start", id=id)
        try:
            cursor = self._store.history_of(id)
        except ItemLedgerError:
            raise
        except Exception as exc:
            raise StoreError(f"Failed to get the history for this ID: {id}: {exc}") from exc

        versions: list[ItemVersion] = []
        with cursor:
            try:
                for mod in cursor:
                    versions.append(to_version(mod))
            except ItemLedgerError:
                raise
            except Exception as exc:
                raise StoreError(f"Failed to read the history for this ID: {id}: {exc}") from exc

        _logger.debug("history end", id=id, versions=len(versions))
        return versions

    # ------------------------------------------------------------------
    # Store access
    # ------------------------------------------------------------------

    def _load(self, id: str) -> Record:
        raw = self._read(id)
        if raw is None:
            raise NotFoundError(f"An Item does not exist for this ID: {id}")
        return Record.from_json(raw)

    def _read(self, id: str) -> bytes | None:
        try:
            return self._store.get(id)
        except ItemLedgerError:
            raise
        except Exception as exc:
            raise StoreError(f"Failed to get the Item: {exc}") from exc

    def _write(self, id: str, payload: bytes) -> None:
        try:
            self._store.put(id, payload)
        except ItemLedgerError:
            raise
        except Exception as exc:
            raise StoreError(f"Failed to put the Item: {exc}") from exc
