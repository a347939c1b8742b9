"""Item record and history data structures."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields, replace
from datetime import datetime

from itemledger.errors import DeserializationError

REMOVED_STATE = "REMOVED"


@dataclass(frozen=True)
class Record:
    """A single item as stored under its ``id`` in the ledger.

    All fields are opaque strings. ``price`` is never parsed as a number and
    ``state`` is free-form except for the ``REMOVED`` soft-delete sentinel.
    """

    id: str
    name: str
    description: str
    price: str
    state: str

    def to_json(self) -> bytes:
        """Compact JSON object with the five fields in declaration order."""
        return json.dumps(asdict(self), separators=(",", ":"), ensure_ascii=False).encode("utf-8")

    @classmethod
    def from_json(cls, raw: bytes) -> Record:
        """Parse a stored payload, rejecting anything that is not exactly a Record."""
        try:
            data = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DeserializationError(f"Stored Item is not valid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise DeserializationError("Stored Item is not a JSON object")

        expected = [f.name for f in fields(cls)]
        missing = [name for name in expected if name not in data]
        if missing:
            raise DeserializationError(f"Stored Item is missing fields: {', '.join(missing)}")
        extra = sorted(set(data) - set(expected))
        if extra:
            raise DeserializationError(f"Stored Item has unexpected fields: {', '.join(extra)}")
        for name in expected:
            if not isinstance(data[name], str):
                raise DeserializationError(f"Stored Item field '{name}' is not a string")

        return cls(**{name: data[name] for name in expected})

    def with_price(self, price: str) -> Record:
        return replace(self, price=price)

    def with_state(self, state: str) -> Record:
        return replace(self, state=state)

    @property
    def removed(self) -> bool:
        return self.state == REMOVED_STATE


@dataclass(frozen=True)
class KeyModification:
    """One write (or delete marker) recorded by the ledger for a key.

    Produced by the Ledger Store, never constructed by the contract itself
    outside of tests.
    """

    tx_id: str
    value: bytes | None
    timestamp: datetime
    is_delete: bool = False


@dataclass(frozen=True)
class ItemVersion:
    """A history entry as returned by the history operation."""

    tx_id: str
    value: object | None  # decoded JSON as stored, None for delete markers
    timestamp: str  # human-readable, see contract.history.render_timestamp
    is_delete: bool

    def to_dict(self) -> dict[str, object]:
        """Wire shape consumed downstream; key names and order are fixed."""
        return {
            "TxId": self.tx_id,
            "Value": self.value,
            "Timestamp": self.timestamp,
            "IsDelete": "true" if self.is_delete else "false",
        }
