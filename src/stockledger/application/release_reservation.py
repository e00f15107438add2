"""Application service: Release Reservation use case.

Used when an order is cancelled.  Only what the order actually holds is
given back, so cancelling twice or cancelling an order that was only
partially reserved never frees units held by other orders.
"""

from __future__ import annotations

from stockledger.application.dto import StockItemSpec, to_stock_lines
from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.results import BatchResult
from stockledger.domain.model.value_objects import StockLine
from stockledger.domain.repository.reservation_repository import (
    ReservationRepository,
)
from stockledger.domain.service.inventory_ledger_service import (
    InventoryLedgerService,
)


class ReleaseReservationHandler:

    def __init__(
        self,
        ledger: InventoryLedgerService,
        reservation_repo: ReservationRepository,
    ) -> None:
        self._ledger = ledger
        self._reservation_repo = reservation_repo

    def handle(
        self,
        order_id: str,
        item_specs: list[StockItemSpec] | None = None,
        actor_id: str | None = None,
    ) -> BatchResult:
        """Release the given items, or everything the order holds if None."""
        if item_specs is not None:
            lines = to_stock_lines(item_specs)
        else:
            lines = [
                StockLine.of(entry.product_id, entry.quantity)
                for entry in self._reservation_repo.list_for_order(order_id)
                if entry.quantity > 0
            ]
        if not lines:
            raise ValidationError(f"Order #{order_id} holds no reserved stock")

        return self._ledger.release_reservation(order_id, lines, actor_id=actor_id)
