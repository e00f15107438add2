"""Application service: Write Off Stock use case.

Removes damaged or lost units.  Only unreserved stock can be written off.
"""

from __future__ import annotations

from stockledger.domain.exceptions import EntityNotFoundError, ValidationError
from stockledger.domain.model.inventory import InventoryRecord
from stockledger.domain.model.movement import MovementRecord, ReferenceType
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.domain.service.movement_recorder import MovementRecorder


class WriteOffStockHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        movements: MovementRecorder,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._movements = movements

    def handle(
        self,
        product_id: str,
        quantity: int,
        reason: str,
        notes: str | None = None,
        actor_id: str | None = None,
    ) -> InventoryRecord:
        if quantity <= 0 or not reason or not reason.strip():
            raise ValidationError("Enter quantity and reason")

        record = self._inventory_repo.get_by_product_id(product_id)
        if record is None:
            raise EntityNotFoundError(f"No inventory record for product '{product_id}'")

        record.write_off(quantity)
        self._inventory_repo.save(record)

        self._movements.record(
            MovementRecord(
                product_id=product_id,
                delta_qty=-quantity,
                reason=reason.strip(),
                reference_type=ReferenceType.WRITE_OFF,
                notes=notes or None,
                actor_id=actor_id,
            )
        )
        return record
