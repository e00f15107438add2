"""Product aggregate.

Products are owned by the catalog.  The ledger only reads their
fallback availability label.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockledger.domain.exceptions import ValidationError


@dataclass
class Product:
    """A product in the catalog.

    ``availability`` is the shopper-facing label shown when the product is
    not in stock, e.g. "Ships in 2-3 days".
    """

    id: str
    name: str
    availability: str | None = None

    @staticmethod
    def create(product_id: str, name: str, availability: str | None = None) -> Product:
        if not product_id or not product_id.strip():
            raise ValidationError("Product ID is required")
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        label = availability.strip() if availability else None
        return Product(id=product_id.strip(), name=name.strip(), availability=label or None)
