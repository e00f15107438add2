"""Application service: create empty inventory records for new products."""

from __future__ import annotations

from stockledger.domain.model.inventory import DEFAULT_REORDER_LEVEL, InventoryRecord
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.domain.repository.product_repository import ProductRepository


class InitializeInventoryHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        product_repo: ProductRepository,
        reorder_level: int = DEFAULT_REORDER_LEVEL,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._product_repo = product_repo
        self._reorder_level = reorder_level

    def handle(self) -> list[str]:
        """Return the IDs of the products that received a new record."""
        existing = {record.product_id for record in self._inventory_repo.list_all()}
        created: list[str] = []
        for product in self._product_repo.list_all():
            if product.id in existing:
                continue
            self._inventory_repo.save(
                InventoryRecord(product_id=product.id, reorder_level=self._reorder_level)
            )
            created.append(product.id)
        return created
