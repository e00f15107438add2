"""Application service: Receive Stock use case.

Books a delivery into the warehouse.  Creates the inventory record the
first time a product is stocked.
"""

from __future__ import annotations

import logging

from stockledger.domain.exceptions import EntityNotFoundError, ValidationError
from stockledger.domain.model.inventory import DEFAULT_REORDER_LEVEL, InventoryRecord
from stockledger.domain.model.movement import MovementRecord, ReferenceType
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.domain.repository.product_repository import ProductRepository
from stockledger.domain.service.movement_recorder import MovementRecorder

logger = logging.getLogger(__name__)


class ReceiveStockHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        product_repo: ProductRepository,
        movements: MovementRecorder,
        default_reorder_level: int = DEFAULT_REORDER_LEVEL,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._product_repo = product_repo
        self._movements = movements
        self._default_reorder_level = default_reorder_level

    def handle(
        self,
        product_id: str,
        quantity: int,
        notes: str | None = None,
        actor_id: str | None = None,
    ) -> InventoryRecord:
        if quantity <= 0:
            raise ValidationError("Received quantity must be positive")

        record = self._inventory_repo.get_by_product_id(product_id)
        if record is None:
            if self._product_repo.get_by_id(product_id) is None:
                raise EntityNotFoundError(f"Product not found: '{product_id}'")
            record = InventoryRecord(
                product_id=product_id, reorder_level=self._default_reorder_level
            )

        record.receive(quantity)
        self._inventory_repo.save(record)

        self._movements.record(
            MovementRecord(
                product_id=product_id,
                delta_qty=quantity,
                reason="Stock received",
                reference_type=ReferenceType.MANUAL,
                notes=notes or None,
                actor_id=actor_id,
            )
        )
        logger.info("Received %d unit(s) of product %s", quantity, product_id)
        return record
