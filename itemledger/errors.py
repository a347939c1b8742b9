"""Error kinds raised by the item contract.

Every error is terminal for the current operation. The dispatcher turns
them into failure envelopes carrying ``code`` and the error message.
"""

from __future__ import annotations


class ItemLedgerError(Exception):
    """Base class for all contract errors."""

    code = "ITEMLEDGER_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ItemLedgerError):
    """Bad arity or a blank argument. Never reaches the store."""

    code = "VALIDATION_ERROR"


class ConflictError(ItemLedgerError):
    """Create on a key that already holds a value."""

    code = "CONFLICT"


class NotFoundError(ItemLedgerError):
    """Mutate or query on a key that holds no value."""

    code = "NOT_FOUND"


class DeserializationError(ItemLedgerError):
    """Stored payload does not have the Record shape."""

    code = "DESERIALIZATION_ERROR"


class StoreError(ItemLedgerError):
    """Ledger substrate failure on read, write or history iteration."""

    code = "STORE_ERROR"


class UnknownOperationError(ItemLedgerError):
    """Operation name not present in the dispatch table."""

    code = "UNKNOWN_OPERATION"
