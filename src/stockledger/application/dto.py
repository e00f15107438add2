"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockledger.domain.model.value_objects import StockLine


@dataclass(frozen=True)
class StockItemSpec:
    """Input: a product and how many units the order wants."""

    product_id: str
    quantity: int


def to_stock_lines(specs: list[StockItemSpec]) -> list[StockLine]:
    return [StockLine.of(spec.product_id, spec.quantity) for spec in specs]


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: str
    product_name: str
    on_hand: int
    reserved: int
    available: int
    reorder_level: int | None
    status: str
    below_reorder: bool


@dataclass(frozen=True)
class MovementDTO:
    timestamp: str
    product_id: str
    delta: int
    reason: str
    reference_type: str
    reference_id: str
    notes: str
    actor_id: str


@dataclass(frozen=True)
class OrderDTO:
    id: str
    customer_name: str
    needs_stock_confirmation: bool
    created_at: str
    reservations: dict[str, int]
