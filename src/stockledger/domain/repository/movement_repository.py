"""Abstract repository for the append-only movement log."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockledger.domain.model.movement import MovementRecord


class MovementRepository(ABC):

    @abstractmethod
    def append(self, movement: MovementRecord) -> None:
        """Append one movement.  Entries are never edited or deleted."""

    @abstractmethod
    def list_for_product(self, product_id: str) -> list[MovementRecord]:
        """Return a product's movements, oldest first."""

    @abstractmethod
    def list_all(self) -> list[MovementRecord]:
        """Return every movement, oldest first."""
