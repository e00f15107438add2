"""Abstract repository for per-order reservation entries."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockledger.domain.model.reservation import ReservationEntry


class ReservationRepository(ABC):

    @abstractmethod
    def get(self, order_id: str, product_id: str) -> ReservationEntry | None:
        """Return the entry for an (order, product) pair, or None."""

    @abstractmethod
    def list_for_order(self, order_id: str) -> list[ReservationEntry]:
        """Return every entry held by an order."""

    @abstractmethod
    def save(self, entry: ReservationEntry) -> None:
        """Persist a new or updated entry.

        Emptied entries are kept: they record that the order reserved
        through the entry ledger, so its releases never fall back to the
        shared counter.
        """
