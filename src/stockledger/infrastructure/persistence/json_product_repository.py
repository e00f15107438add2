"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from pathlib import Path

from stockledger.domain.model.product import Product
from stockledger.domain.repository.product_repository import ProductRepository
from stockledger.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, required=("id", "name"))

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def availability_labels(self, product_ids: list[str]) -> dict[str, str | None]:
        wanted = set(product_ids)
        return {pid: p.availability for pid, p in self._load().items() if pid in wanted}

    def save(self, product: Product) -> None:
        with self._file.lock:
            products = self._load()
            products[product.id] = product
            self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        return {
            item["id"]: Product(
                id=item["id"],
                name=item["name"],
                availability=item.get("availability"),
            )
            for item in self._file.load()
        }

    def _persist(self, products: dict[str, Product]) -> None:
        self._file.persist(
            [
                {"id": p.id, "name": p.name, "availability": p.availability}
                for p in products.values()
            ]
        )
