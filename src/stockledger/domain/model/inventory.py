"""InventoryRecord aggregate — tracks on-hand and reserved stock per product.

Each product has at most one InventoryRecord that knows how many units are
physically in the warehouse and how many of those are held for open orders.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.value_objects import StockStatus

DEFAULT_REORDER_LEVEL = 5
LOW_STOCK_THRESHOLD = 4


@dataclass
class InventoryRecord:
    """Aggregate root for inventory tracking.

    Invariants:
    - ``qty_on_hand`` and ``qty_reserved`` are never negative
    - ``qty_reserved`` should never exceed ``qty_on_hand``; records loaded
      from the store that break this are reported as overcommitted

    ``version`` is the optimistic-concurrency token.  Repositories compare
    it on save and bump it after a successful write.
    """

    product_id: str
    qty_on_hand: int = 0
    qty_reserved: int = 0
    reorder_level: int | None = DEFAULT_REORDER_LEVEL
    opening_quantity: int = 0
    version: int = 0

    # --- Computed properties --------------------------------------------------

    @property
    def raw_available(self) -> int:
        return self.qty_on_hand - self.qty_reserved

    @property
    def available_quantity(self) -> int:
        return max(0, self.raw_available)

    @property
    def is_overcommitted(self) -> bool:
        return self.qty_reserved > self.qty_on_hand or self.qty_reserved < 0

    @property
    def is_below_reorder_level(self) -> bool:
        if self.reorder_level is None:
            return False
        return self.raw_available <= self.reorder_level

    def stock_status(self, low_stock_threshold: int = LOW_STOCK_THRESHOLD) -> StockStatus:
        if self.raw_available <= 0:
            return StockStatus.OUT_OF_STOCK
        if self.raw_available < low_stock_threshold:
            return StockStatus.LOW_STOCK
        return StockStatus.IN_STOCK

    # --- Reservation bookkeeping ----------------------------------------------

    def reserve_up_to(self, quantity: int) -> int:
        """Reserve as much of *quantity* as is available.

        Returns the number of units actually reserved (0 when nothing is
        available).  Never drives ``qty_reserved`` above ``qty_on_hand``.
        """
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")
        reserved = min(quantity, self.available_quantity)
        self.qty_reserved += reserved
        return reserved

    def release(self, quantity: int) -> None:
        """Give back previously reserved units (e.g. on order cancellation)."""
        if quantity <= 0:
            raise ValidationError("Release quantity must be positive")
        if quantity > self.qty_reserved:
            raise ValidationError(
                f"Cannot release {quantity} of product '{self.product_id}' "
                f"(only {self.qty_reserved} currently reserved)"
            )
        self.qty_reserved -= quantity

    def fulfill(self, quantity: int, reserved_cap: int | None = None) -> int:
        """Permanently deduct shipped stock and consume its reservation.

        Up to *quantity* reserved units are consumed, further limited by
        *reserved_cap* when the caller knows how much it actually holds.
        Both counters are floored at zero.  Returns the reserved units
        consumed.
        """
        if quantity <= 0:
            raise ValidationError("Fulfill quantity must be positive")
        was_reserved = min(max(self.qty_reserved, 0), quantity)
        if reserved_cap is not None:
            was_reserved = min(was_reserved, reserved_cap)
        self.qty_on_hand = max(0, self.qty_on_hand - quantity)
        self.qty_reserved = max(0, self.qty_reserved - was_reserved)
        return was_reserved

    # --- Stock keeping --------------------------------------------------------

    def receive(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Received quantity must be positive")
        self.qty_on_hand += quantity

    def adjust(self, delta: int) -> None:
        """Correct the on-hand count by a signed *delta* (stock take)."""
        if delta == 0:
            raise ValidationError("Adjustment must be non-zero")
        new_qty = self.qty_on_hand + delta
        if new_qty < 0:
            raise ValidationError("Cannot have negative stock")
        if new_qty < self.qty_reserved:
            raise ValidationError(
                f"Cannot reduce stock of product '{self.product_id}' to {new_qty} "
                f"while {self.qty_reserved} units are reserved"
            )
        self.qty_on_hand = new_qty

    def write_off(self, quantity: int) -> None:
        """Remove damaged or lost units from unreserved stock."""
        if quantity <= 0:
            raise ValidationError("Write-off quantity must be positive")
        if quantity > self.available_quantity:
            raise ValidationError("Cannot write off more than available stock")
        self.qty_on_hand -= quantity
