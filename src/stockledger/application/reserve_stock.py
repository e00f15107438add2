"""Application service: Reserve Stock use case.

Called once an order has been placed.  Reservation is soft: the order is
accepted whatever the stock level, and anything that could not be fully
reserved flags the order for manual stock confirmation.
"""

from __future__ import annotations

from stockledger.application.dto import StockItemSpec, to_stock_lines
from stockledger.domain.exceptions import EntityNotFoundError, ValidationError
from stockledger.domain.model.results import ReservationResult
from stockledger.domain.repository.order_repository import OrderRepository
from stockledger.domain.service.inventory_ledger_service import (
    InventoryLedgerService,
)


class ReserveStockHandler:

    def __init__(
        self,
        ledger: InventoryLedgerService,
        order_repo: OrderRepository,
    ) -> None:
        self._ledger = ledger
        self._order_repo = order_repo

    def handle(
        self,
        order_id: str,
        item_specs: list[StockItemSpec],
        actor_id: str | None = None,
    ) -> ReservationResult:
        if not item_specs:
            raise ValidationError("Must specify at least one item to reserve")
        if self._order_repo.get_by_id(order_id) is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        return self._ledger.reserve_stock(
            order_id, to_stock_lines(item_specs), actor_id=actor_id
        )
