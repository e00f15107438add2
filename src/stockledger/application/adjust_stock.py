"""Application service: Adjust Stock use case (stock-take corrections)."""

from __future__ import annotations

from stockledger.domain.exceptions import EntityNotFoundError, ValidationError
from stockledger.domain.model.inventory import InventoryRecord
from stockledger.domain.model.movement import MovementRecord, ReferenceType
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.domain.service.movement_recorder import MovementRecorder


class AdjustStockHandler:

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
        delta: int,
        reason: str,
        notes: str | None = None,
        actor_id: str | None = None,
    ) -> InventoryRecord:
        """Apply a signed correction to the on-hand count."""
        if delta == 0 or not reason or not reason.strip():
            raise ValidationError("Enter quantity and reason")

        record = self._inventory_repo.get_by_product_id(product_id)
        if record is None:
            raise EntityNotFoundError(f"No inventory record for product '{product_id}'")

        record.adjust(delta)
        self._inventory_repo.save(record)

        self._movements.record(
            MovementRecord(
                product_id=product_id,
                delta_qty=delta,
                reason=reason.strip(),
                reference_type=ReferenceType.ADJUSTMENT,
                notes=notes or None,
                actor_id=actor_id,
            )
        )
        return record
