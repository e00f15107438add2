"""JSON-file-backed implementation of MovementRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from stockledger.domain.exceptions import LedgerUnavailable
from stockledger.domain.model.movement import MovementRecord, ReferenceType
from stockledger.domain.repository.movement_repository import MovementRepository
from stockledger.infrastructure.persistence.json_file import JsonFile


class JsonMovementRepository(MovementRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(
            file_path,
            required=("product_id", "delta_qty", "reason", "reference_type", "created_at"),
        )

    def append(self, movement: MovementRecord) -> None:
        with self._file.lock:
            records = self._file.load()
            records.append(self._to_raw(movement))
            self._file.persist(records)

    def list_for_product(self, product_id: str) -> list[MovementRecord]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["product_id"] == product_id
        ]

    def list_all(self) -> list[MovementRecord]:
        return [self._to_domain(raw) for raw in self._file.load()]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(movement: MovementRecord) -> dict:
        return {
            "product_id": movement.product_id,
            "delta_qty": movement.delta_qty,
            "reason": movement.reason,
            "reference_type": movement.reference_type.value,
            "reference_id": movement.reference_id,
            "notes": movement.notes,
            "created_by": movement.actor_id,
            "created_at": movement.timestamp.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> MovementRecord:
        try:
            reference_type = ReferenceType(raw["reference_type"])
            timestamp = datetime.fromisoformat(raw["created_at"])
        except (TypeError, ValueError) as exc:
            raise LedgerUnavailable(f"Unreadable movement row: {exc}") from exc
        return MovementRecord(
            product_id=raw["product_id"],
            delta_qty=raw["delta_qty"],
            reason=raw["reason"],
            reference_type=reference_type,
            reference_id=raw.get("reference_id"),
            notes=raw.get("notes"),
            actor_id=raw.get("created_by"),
            timestamp=timestamp,
        )
