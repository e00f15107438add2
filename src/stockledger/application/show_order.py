"""Application service: Show Order use case (query)."""

from __future__ import annotations

from stockledger.application.dto import OrderDTO
from stockledger.domain.exceptions import EntityNotFoundError
from stockledger.domain.repository.order_repository import OrderRepository
from stockledger.domain.repository.reservation_repository import (
    ReservationRepository,
)


class ShowOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        reservation_repo: ReservationRepository,
    ) -> None:
        self._order_repo = order_repo
        self._reservation_repo = reservation_repo

    def handle(self, order_id: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return OrderDTO(
            id=order.id,
            customer_name=order.customer_name,
            needs_stock_confirmation=order.needs_stock_confirmation,
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
            reservations={
                entry.product_id: entry.quantity
                for entry in self._reservation_repo.list_for_order(order_id)
            },
        )
