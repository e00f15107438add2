"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from stockledger.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot reserve, release or ship
    zero or negative units.
    """

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True is not a quantity
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class StockLine:
    """A (product, quantity) pair as requested by an order."""

    product_id: str
    quantity: Quantity

    @staticmethod
    def of(product_id: str, quantity: int) -> StockLine:
        if not product_id or not str(product_id).strip():
            raise ValidationError("Product ID is required")
        return StockLine(product_id=str(product_id).strip(), quantity=Quantity(quantity))


class MissingRecordPolicy(Enum):
    """How to treat a product that has no inventory record.

    CONSERVATIVE reports it as having nothing available.  UNLIMITED treats
    it as a legacy product whose stock is not tracked.
    """

    CONSERVATIVE = "conservative"
    UNLIMITED = "unlimited"


class StockStatus(Enum):
    IN_STOCK = "IN_STOCK"
    LOW_STOCK = "LOW_STOCK"
    OUT_OF_STOCK = "OUT_OF_STOCK"


IN_STOCK_LABEL = "In Stock"
DEFAULT_AVAILABILITY_LABEL = "Available within 24 hours"
