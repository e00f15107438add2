"""Application service: Verify Ledger use case.

The movement log is the only independent record of how stock got to its
current level.  For every product:

    opening_quantity + sum(movement.delta_qty) == qty_on_hand

and the reserved counter must stay within ``0 <= reserved <= on_hand``.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass

from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.domain.repository.movement_repository import MovementRepository


@dataclass(frozen=True)
class Discrepancy:
    product_id: str
    on_hand: int
    expected_on_hand: int
    reserved: int
    problem: str


class VerifyLedgerHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        movement_repo: MovementRepository,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._movement_repo = movement_repo

    def handle(self) -> list[Discrepancy]:
        deltas: dict[str, int] = defaultdict(int)
        for movement in self._movement_repo.list_all():
            deltas[movement.product_id] += movement.delta_qty

        problems: list[Discrepancy] = []
        for record in sorted(self._inventory_repo.list_all(), key=lambda r: r.product_id):
            expected = record.opening_quantity + deltas[record.product_id]
            issues = []
            if expected != record.qty_on_hand:
                issues.append(f"movements account for {expected} on hand")
            if record.is_overcommitted:
                issues.append("reserved exceeds on hand")
            if issues:
                problems.append(
                    Discrepancy(
                        product_id=record.product_id,
                        on_hand=record.qty_on_hand,
                        expected_on_hand=expected,
                        reserved=record.qty_reserved,
                        problem="; ".join(issues),
                    )
                )
        return problems
