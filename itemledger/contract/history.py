"""History reconstruction and serialization.

Turns the ledger's raw ``KeyModification`` entries into ``ItemVersion``
values and renders them as the JSON array returned by the history operation:

    [{"TxId": "...", "Value": {...} | null, "Timestamp": "...", "IsDelete": "false"}, ...]

The ``IsDelete`` flag is the ledger's own delete marker. Soft-deleted items
are ordinary writes (``state == "REMOVED"``) and are never flagged here.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import UTC, datetime

from itemledger.errors import DeserializationError
from itemledger.models.records import ItemVersion, KeyModification


def render_timestamp(ts: datetime) -> str:
    """Render *ts* in UTC as ``YYYY-MM-DD HH:MM:SS.ffffff +0000 UTC``."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC).strftime("%Y-%m-%d %H:%M:%S.%f +0000 UTC")


def to_version(mod: KeyModification) -> ItemVersion:
    value: object | None = None
    if not mod.is_delete and mod.value is not None:
        try:
            decoded = json.loads(mod.value)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DeserializationError(f"History entry {mod.tx_id} is not valid JSON: {exc}") from exc
        # embedded as stored; older versions need not have the Record shape
        value = decoded

    return ItemVersion(
        tx_id=mod.tx_id,
        value=value,
        timestamp=render_timestamp(mod.timestamp),
        is_delete=mod.is_delete,
    )


def serialize_history(versions: Iterable[ItemVersion]) -> bytes:
    """Encode *versions* as a JSON array, preserving their order."""
    return json.dumps([v.to_dict() for v in versions], ensure_ascii=False).encode("utf-8")
