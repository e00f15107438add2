"""Wiring: builds the JSON repositories and the ledger service from settings.

The CLI gets everything it needs from the ``Components`` returned by
``build``.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockledger.domain.service.inventory_ledger_service import (
    InventoryLedgerService,
)
from stockledger.domain.service.movement_recorder import MovementRecorder
from stockledger.infrastructure.config import Settings, load_settings
from stockledger.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)
from stockledger.infrastructure.persistence.json_movement_repository import (
    JsonMovementRepository,
)
from stockledger.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from stockledger.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from stockledger.infrastructure.persistence.json_reservation_repository import (
    JsonReservationRepository,
)


@dataclass
class Components:
    settings: Settings
    inventory_repo: JsonInventoryRepository
    movement_repo: JsonMovementRepository
    reservation_repo: JsonReservationRepository
    product_repo: JsonProductRepository
    order_repo: JsonOrderRepository
    movements: MovementRecorder
    ledger: InventoryLedgerService


def build(settings: Settings | None = None) -> Components:
    settings = settings or load_settings()
    data_dir = settings.data_dir

    inventory_repo = JsonInventoryRepository(data_dir / "inventory.json")
    movement_repo = JsonMovementRepository(data_dir / "movements.json")
    reservation_repo = JsonReservationRepository(data_dir / "reservations.json")
    product_repo = JsonProductRepository(data_dir / "products.json")
    order_repo = JsonOrderRepository(data_dir / "orders.json")
    movements = MovementRecorder(movement_repo)

    ledger = InventoryLedgerService(
        inventory_repo=inventory_repo,
        reservation_repo=reservation_repo,
        product_repo=product_repo,
        order_repo=order_repo,
        movements=movements,
        max_attempts=settings.max_attempts,
    )
    return Components(
        settings=settings,
        inventory_repo=inventory_repo,
        movement_repo=movement_repo,
        reservation_repo=reservation_repo,
        product_repo=product_repo,
        order_repo=order_repo,
        movements=movements,
        ledger=ledger,
    )
