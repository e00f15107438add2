"""MovementRecord: immutable audit entry for a quantity-affecting event."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ReferenceType(Enum):
    ORDER = "order"
    CANCEL = "cancel"
    FULFILLMENT = "fulfillment"
    MANUAL = "manual"
    ADJUSTMENT = "adjustment"
    WRITE_OFF = "write_off"


@dataclass(frozen=True)
class MovementRecord:
    """One line of the append-only movement log.

    ``delta_qty`` is the signed change to on-hand stock: 0 for
    reservation bookkeeping, negative for shipments and write-offs.
    """

    product_id: str
    delta_qty: int
    reason: str
    reference_type: ReferenceType
    reference_id: str | None = None
    notes: str | None = None
    actor_id: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
