"""Abstract repository for InventoryRecord aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockledger.domain.model.inventory import InventoryRecord


class InventoryRepository(ABC):

    @abstractmethod
    def get_by_product_id(self, product_id: str) -> InventoryRecord | None:
        """Return the inventory record for a product, or None."""

    @abstractmethod
    def get_many(self, product_ids: list[str]) -> dict[str, InventoryRecord]:
        """Return the records that exist for *product_ids*, in one query."""

    @abstractmethod
    def list_all(self) -> list[InventoryRecord]:
        """Return every inventory record."""

    @abstractmethod
    def save(self, record: InventoryRecord) -> None:
        """Persist a new or updated record.

        Compare-and-swap: the stored version must equal ``record.version``
        (or the record must not exist yet), otherwise raises
        ConcurrentModification.  On success ``record.version`` is bumped.
        Raises LedgerUnavailable when the store cannot be reached.
        """
