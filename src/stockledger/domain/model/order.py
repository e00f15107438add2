"""Order: the slice of an order that the ledger writes to.

Orders are created by checkout.  Reservation only ever raises the
``needs_stock_confirmation`` flag when stock could not be fully reserved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from stockledger.domain.exceptions import ValidationError


@dataclass
class Order:

    id: str
    customer_name: str
    needs_stock_confirmation: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(order_id: str, customer_name: str) -> Order:
        if not order_id or not order_id.strip():
            raise ValidationError("Order ID is required")
        if not customer_name or not customer_name.strip():
            raise ValidationError("Customer name is required")
        return Order(id=order_id.strip(), customer_name=customer_name.strip())

    def flag_for_stock_confirmation(self) -> None:
        self.needs_stock_confirmation = True
