"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from stockledger.domain.exceptions import LedgerUnavailable
from stockledger.domain.model.order import Order
from stockledger.domain.repository.order_repository import OrderRepository
from stockledger.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, required=("id", "customer_name", "created_at"))

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def save(self, order: Order) -> None:
        with self._file.lock:
            orders = self._file.load()
            # Upsert: replace if exists, otherwise append
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    orders[i] = self._to_raw(order)
                    break
            else:
                orders.append(self._to_raw(order))
            self._file.persist(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_name": order.customer_name,
            "needs_stock_confirmation": order.needs_stock_confirmation,
            "created_at": order.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        try:
            created_at = datetime.fromisoformat(raw["created_at"])
        except (TypeError, ValueError) as exc:
            raise LedgerUnavailable(f"Unreadable order row: {exc}") from exc
        return Order(
            id=raw["id"],
            customer_name=raw["customer_name"],
            needs_stock_confirmation=raw.get("needs_stock_confirmation", False),
            created_at=created_at,
        )
