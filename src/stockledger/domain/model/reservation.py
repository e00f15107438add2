"""ReservationEntry: units held for one order against one product.

The inventory record only keeps a running ``qty_reserved`` counter; these
entries remember which order holds how much of it, so a cancellation can
give back exactly what was reserved.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockledger.domain.exceptions import ValidationError


@dataclass
class ReservationEntry:

    order_id: str
    product_id: str
    quantity: int = 0

    def hold(self, quantity: int) -> None:
        if quantity < 0:
            raise ValidationError("Cannot hold a negative quantity")
        self.quantity += quantity

    def give_back(self, quantity: int) -> None:
        if quantity < 0:
            raise ValidationError("Cannot give back a negative quantity")
        self.quantity = max(0, self.quantity - quantity)

    @property
    def is_empty(self) -> bool:
        return self.quantity == 0
