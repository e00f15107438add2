"""Application service: Add Product use case."""

from __future__ import annotations

from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.product import Product
from stockledger.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, name: str, availability: str | None = None) -> Product:
        """Add a product to the catalog."""
        product = Product.create(product_id, name, availability)
        if self._product_repo.get_by_id(product.id) is not None:
            raise ValidationError(f"Product '{product.id}' already exists")
        self._product_repo.save(product)
        return product
