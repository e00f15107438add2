"""Application service: Register Order use case.

Orders are placed by checkout; this records the ones the ledger needs to
know about so reservations can be tied to them.
"""

from __future__ import annotations

from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.order import Order
from stockledger.domain.repository.order_repository import OrderRepository


class RegisterOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, customer_name: str) -> Order:
        order = Order.create(order_id, customer_name)
        if self._order_repo.get_by_id(order.id) is not None:
            raise ValidationError(f"Order #{order.id} already exists")
        self._order_repo.save(order)
        return order
