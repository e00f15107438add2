"""Application service: Fulfill Order use case.

Commits a shipment against the ledger: on-hand stock goes down and the
matching reservation is consumed.
"""

from __future__ import annotations

from stockledger.application.dto import StockItemSpec, to_stock_lines
from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.results import BatchResult
from stockledger.domain.service.inventory_ledger_service import (
    InventoryLedgerService,
)


class FulfillOrderHandler:

    def __init__(self, ledger: InventoryLedgerService) -> None:
        self._ledger = ledger

    def handle(
        self,
        order_id: str,
        item_specs: list[StockItemSpec],
        actor_id: str | None = None,
    ) -> BatchResult:
        if not item_specs:
            raise ValidationError("Must specify at least one item to fulfill")
        return self._ledger.fulfill_order(
            order_id, to_stock_lines(item_specs), actor_id=actor_id
        )
