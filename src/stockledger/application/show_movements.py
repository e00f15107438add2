"""Application service: Show Movements use case (query)."""

from __future__ import annotations

from stockledger.application.dto import MovementDTO
from stockledger.domain.model.movement import MovementRecord
from stockledger.domain.repository.movement_repository import MovementRepository


class ShowMovementsHandler:

    def __init__(self, movement_repo: MovementRepository) -> None:
        self._movement_repo = movement_repo

    def handle(self, product_id: str | None = None, limit: int = 50) -> list[MovementDTO]:
        """Return the most recent movements first."""
        if product_id is not None:
            movements = self._movement_repo.list_for_product(product_id)
        else:
            movements = self._movement_repo.list_all()
        recent = list(reversed(movements))[:limit]
        return [self._to_dto(m) for m in recent]

    @staticmethod
    def _to_dto(movement: MovementRecord) -> MovementDTO:
        return MovementDTO(
            timestamp=movement.timestamp.strftime("%Y-%m-%d %H:%M UTC"),
            product_id=movement.product_id,
            delta=movement.delta_qty,
            reason=movement.reason,
            reference_type=movement.reference_type.value,
            reference_id=movement.reference_id or "",
            notes=movement.notes or "",
            actor_id=movement.actor_id or "",
        )
