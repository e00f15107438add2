"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from stockledger.application.dto import InventoryLineDTO
from stockledger.domain.model.inventory import LOW_STOCK_THRESHOLD
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.domain.repository.product_repository import ProductRepository


class ShowInventoryHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        product_repo: ProductRepository,
        low_stock_threshold: int = LOW_STOCK_THRESHOLD,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._product_repo = product_repo
        self._low_stock_threshold = low_stock_threshold

    def handle(self, low_stock_only: bool = False) -> list[InventoryLineDTO]:
        names = {p.id: p.name for p in self._product_repo.list_all()}
        lines = [
            InventoryLineDTO(
                product_id=record.product_id,
                product_name=names.get(record.product_id, ""),
                on_hand=record.qty_on_hand,
                reserved=record.qty_reserved,
                available=record.raw_available,
                reorder_level=record.reorder_level,
                status=record.stock_status(self._low_stock_threshold).value,
                below_reorder=record.is_below_reorder_level,
            )
            for record in self._inventory_repo.list_all()
        ]
        if low_stock_only:
            lines = [line for line in lines if line.below_reorder]
        return sorted(lines, key=lambda line: line.product_id)
