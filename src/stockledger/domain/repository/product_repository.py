"""Abstract repository for the Product catalog.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockledger.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    def availability_labels(self, product_ids: list[str]) -> dict[str, str | None]:
        """Return the fallback availability label of each known product.

        Implementations backed by a real store should override this with a
        single batched query.
        """
        wanted = set(product_ids)
        return {p.id: p.availability for p in self.list_all() if p.id in wanted}
