"""Application service: availability queries for the storefront."""

from __future__ import annotations

from stockledger.application.dto import StockItemSpec, to_stock_lines
from stockledger.domain.model.results import AvailabilityResult
from stockledger.domain.model.value_objects import MissingRecordPolicy
from stockledger.domain.service.inventory_ledger_service import (
    InventoryLedgerService,
)


class CheckAvailabilityHandler:

    def __init__(self, ledger: InventoryLedgerService) -> None:
        self._ledger = ledger

    def handle(
        self,
        item_specs: list[StockItemSpec],
        untracked_is_unlimited: bool = False,
    ) -> list[AvailabilityResult]:
        policy = (
            MissingRecordPolicy.UNLIMITED
            if untracked_is_unlimited
            else MissingRecordPolicy.CONSERVATIVE
        )
        return self._ledger.check_availability(to_stock_lines(item_specs), policy=policy)


class AvailabilityLabelHandler:

    def __init__(self, ledger: InventoryLedgerService) -> None:
        self._ledger = ledger

    def handle(self, product_id: str) -> str:
        return self._ledger.get_availability_label(product_id)
