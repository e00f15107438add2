"""JSON-file-backed implementation of ReservationRepository."""

from __future__ import annotations

from pathlib import Path

from stockledger.domain.model.reservation import ReservationEntry
from stockledger.domain.repository.reservation_repository import (
    ReservationRepository,
)
from stockledger.infrastructure.persistence.json_file import JsonFile


class JsonReservationRepository(ReservationRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, required=("order_id", "product_id"))

    def get(self, order_id: str, product_id: str) -> ReservationEntry | None:
        for raw in self._file.load():
            if raw["order_id"] == order_id and raw["product_id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_for_order(self, order_id: str) -> list[ReservationEntry]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["order_id"] == order_id
        ]

    def save(self, entry: ReservationEntry) -> None:
        with self._file.lock:
            records = self._file.load()
            for i, raw in enumerate(records):
                if raw["order_id"] == entry.order_id and raw["product_id"] == entry.product_id:
                    records[i] = self._to_raw(entry)
                    break
            else:
                records.append(self._to_raw(entry))
            self._file.persist(records)

    @staticmethod
    def _to_raw(entry: ReservationEntry) -> dict:
        return {
            "order_id": entry.order_id,
            "product_id": entry.product_id,
            "quantity": entry.quantity,
        }

    @staticmethod
    def _to_domain(raw: dict) -> ReservationEntry:
        return ReservationEntry(
            order_id=raw["order_id"],
            product_id=raw["product_id"],
            quantity=raw.get("quantity", 0),
        )
