"""JSON-file-backed implementation of InventoryRepository."""

from __future__ import annotations

from pathlib import Path

from stockledger.domain.exceptions import ConcurrentModification
from stockledger.domain.model.inventory import InventoryRecord
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.infrastructure.persistence.json_file import JsonFile


class JsonInventoryRepository(InventoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, required=("product_id",))

    # --- InventoryRepository interface ----------------------------------------

    def get_by_product_id(self, product_id: str) -> InventoryRecord | None:
        for raw in self._file.load():
            if raw["product_id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_many(self, product_ids: list[str]) -> dict[str, InventoryRecord]:
        wanted = set(product_ids)
        return {
            raw["product_id"]: self._to_domain(raw)
            for raw in self._file.load()
            if raw["product_id"] in wanted
        }

    def list_all(self) -> list[InventoryRecord]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, record: InventoryRecord) -> None:
        with self._file.lock:
            records = self._file.load()
            for i, raw in enumerate(records):
                if raw["product_id"] == record.product_id:
                    stored = raw.get("version", 0)
                    if stored != record.version:
                        raise ConcurrentModification(record.product_id, record.version, stored)
                    records[i] = self._to_raw(record, record.version + 1)
                    break
            else:
                if record.version != 0:
                    raise ConcurrentModification(record.product_id, record.version, None)
                records.append(self._to_raw(record, 1))
            self._file.persist(records)
            record.version += 1

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(record: InventoryRecord, version: int) -> dict:
        return {
            "product_id": record.product_id,
            "qty_on_hand": record.qty_on_hand,
            "qty_reserved": record.qty_reserved,
            "reorder_level": record.reorder_level,
            "opening_quantity": record.opening_quantity,
            "version": version,
        }

    @staticmethod
    def _to_domain(raw: dict) -> InventoryRecord:
        return InventoryRecord(
            product_id=raw["product_id"],
            qty_on_hand=raw.get("qty_on_hand", 0),
            qty_reserved=raw.get("qty_reserved", 0),
            reorder_level=raw.get("reorder_level"),
            opening_quantity=raw.get("opening_quantity", 0),
            version=raw.get("version", 0),
        )
