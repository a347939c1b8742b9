"""Core data structures for itemledger."""

from itemledger.models.config import ItemLedgerConfig
from itemledger.models.records import REMOVED_STATE, ItemVersion, KeyModification, Record
from itemledger.models.responses import Response

__all__ = [
    "ItemLedgerConfig",
    "ItemVersion",
    "KeyModification",
    "REMOVED_STATE",
    "Record",
    "Response",
]
