"""Result types returned by the ledger service.

Batch operations process each line independently, so results are a list
of per-item outcomes.  A FAILED outcome carries the store error, which
lets callers tell "reserved 0 because out of stock" apart from
"reserved 0 because the store call failed".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from stockledger.domain.exceptions import DomainException


class ItemStatus(Enum):
    RESERVED = "RESERVED"
    PARTIALLY_RESERVED = "PARTIALLY_RESERVED"
    OUT_OF_STOCK = "OUT_OF_STOCK"
    NO_RECORD = "NO_RECORD"
    RELEASED = "RELEASED"
    FULFILLED = "FULFILLED"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class ItemOutcome:
    product_id: str
    requested: int
    status: ItemStatus
    quantity: int = 0  # units actually reserved, released or shipped
    error: DomainException | None = None

    @property
    def failed(self) -> bool:
        return self.status == ItemStatus.FAILED


@dataclass(frozen=True)
class AvailabilityResult:
    product_id: str
    requested_qty: int
    available_qty: int
    is_available: bool
    availability_label: str


@dataclass(frozen=True)
class ReservedItem:
    product_id: str
    reserved_qty: int


@dataclass(frozen=True)
class ReservationResult:
    success: bool
    reserved_items: list[ReservedItem]
    needs_stock_confirmation: bool
    outcomes: list[ItemOutcome] = field(default_factory=list)

    @property
    def failures(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if o.failed]


@dataclass(frozen=True)
class BatchResult:
    """Outcome of a release or fulfillment batch.

    Truthy when no item failed, so it can stand in for the plain boolean
    older callers expect.
    """

    success: bool
    outcomes: list[ItemOutcome] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.success

    @property
    def failures(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if o.failed]
