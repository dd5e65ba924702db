"""
Inventory line items built from decoded records.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from .core.record import DecodedRecord


@dataclass
class InventoryItem:
    id: str
    code: str
    gtin: str
    sscc: str
    lot: str
    expiry: str
    serial: str
    quantity: int
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def build_inventory_item(
    record: DecodedRecord,
    *,
    quantity: int = 1,
    now: Optional[str] = None
) -> InventoryItem:
    """
    Build an inventory line from a decoded record.

    When the payload carried neither a GTIN nor an SSCC the raw scan is
    used as the GTIN. Missing lot and expiry are shown as '-'; the expiry
    falls back to the best-before date.
    """
    return InventoryItem(
        id=uuid4().hex,
        code=record.raw,
        gtin=record.gtin or ("" if record.sscc else record.raw),
        sscc=record.sscc or "",
        lot=record.lot or "-",
        expiry=record.expiry_date or record.best_before_date or "-",
        serial=record.serial or "",
        quantity=max(0, quantity),
        timestamp=now or _utc_now(),
    )


def adjust_quantity(item: InventoryItem, delta: int) -> InventoryItem:
    """Add 'delta' to the item quantity, never going below zero."""
    item.quantity = max(0, item.quantity + delta)
    return item


def set_quantity(item: InventoryItem, value: int) -> InventoryItem:
    """Set an exact quantity, never below zero."""
    item.quantity = max(0, value)
    return item
