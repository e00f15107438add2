"""Domain service: Inventory Ledger.

Checks availability, reserves stock for orders, releases reservations on
cancellation and commits fulfillment against the per-product inventory
records, logging every quantity-affecting event to the movement log.

Every record update is a read-modify-write guarded by the record's
``version``: if another writer got there first the save raises
ConcurrentModification and the line is re-read and re-evaluated, so two
orders racing for the same units can never reserve more than is there.

Lines in a batch are processed independently.  A store failure on one
line is reported in that line's outcome and processing moves on.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from stockledger.domain.exceptions import (
    ConcurrentModification,
    DomainException,
    LedgerUnavailable,
    ValidationError,
)
from stockledger.domain.model.inventory import InventoryRecord
from stockledger.domain.model.movement import MovementRecord, ReferenceType
from stockledger.domain.model.reservation import ReservationEntry
from stockledger.domain.model.results import (
    AvailabilityResult,
    BatchResult,
    ItemOutcome,
    ItemStatus,
    ReservationResult,
    ReservedItem,
)
from stockledger.domain.model.value_objects import (
    DEFAULT_AVAILABILITY_LABEL,
    IN_STOCK_LABEL,
    MissingRecordPolicy,
    StockLine,
)
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.domain.repository.order_repository import OrderRepository
from stockledger.domain.repository.product_repository import ProductRepository
from stockledger.domain.repository.reservation_repository import (
    ReservationRepository,
)
from stockledger.domain.service.movement_recorder import MovementRecorder

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 5


class InventoryLedgerService:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        reservation_repo: ReservationRepository,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        movements: MovementRecorder,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValidationError("max_attempts must be at least 1")
        self._inventory_repo = inventory_repo
        self._reservation_repo = reservation_repo
        self._product_repo = product_repo
        self._order_repo = order_repo
        self._movements = movements
        self._max_attempts = max_attempts

    # --- Availability ---------------------------------------------------------

    def check_availability(
        self,
        lines: list[StockLine],
        policy: MissingRecordPolicy = MissingRecordPolicy.CONSERVATIVE,
    ) -> list[AvailabilityResult]:
        """Report availability for each requested line.

        Fetches inventory records and product labels in one batch each.
        By default a product without an inventory record is never reported
        in stock.  Read-only; store failures propagate as LedgerUnavailable.
        """
        if not lines:
            return []

        product_ids = list(dict.fromkeys(line.product_id for line in lines))
        records = self._inventory_repo.get_many(product_ids)
        labels = self._product_repo.availability_labels(product_ids)

        results: list[AvailabilityResult] = []
        for line in lines:
            requested = line.quantity.value
            record = records.get(line.product_id)
            if record is None and policy is MissingRecordPolicy.UNLIMITED:
                available = requested
            elif record is None:
                available = 0
            else:
                self._warn_if_overcommitted(record)
                available = record.available_quantity

            is_available = available >= requested
            label = (
                IN_STOCK_LABEL
                if is_available
                else labels.get(line.product_id) or DEFAULT_AVAILABILITY_LABEL
            )
            logger.debug(
                "Availability lookup: product_id=%s requested=%s available=%s record=%s",
                line.product_id,
                requested,
                available,
                record is not None,
            )
            results.append(
                AvailabilityResult(
                    product_id=line.product_id,
                    requested_qty=requested,
                    available_qty=available,
                    is_available=is_available,
                    availability_label=label,
                )
            )
        return results

    def get_availability_label(self, product_id: str) -> str:
        """Return the shopper-facing availability label for one product.

        A product without an inventory record is treated as untracked
        (unlimited) stock: the ledger has no opinion and the product's own
        label is used.  This differs from ``check_availability``, which
        treats the same product as having nothing available.
        """
        record = self._inventory_repo.get_by_product_id(product_id)
        if record is not None and record.raw_available > 0:
            return IN_STOCK_LABEL

        product = self._product_repo.get_by_id(product_id)
        if product is not None and product.availability:
            return product.availability
        return DEFAULT_AVAILABILITY_LABEL

    # --- Reservation ----------------------------------------------------------

    def reserve_stock(
        self,
        order_id: str,
        lines: Iterable[StockLine],
        actor_id: str | None = None,
    ) -> ReservationResult:
        """Reserve stock for an order, accepting partial reservations.

        Lines that cannot be fully reserved (no record, partial stock, no
        stock, store failure) flag the order for manual stock confirmation.
        """
        outcomes = [self._reserve_line(order_id, line, actor_id) for line in lines]

        needs_confirmation = any(o.status != ItemStatus.RESERVED for o in outcomes)
        flagged = True
        if needs_confirmation:
            flagged = self._flag_order(order_id)

        reserved_items = [
            ReservedItem(product_id=o.product_id, reserved_qty=o.quantity)
            for o in outcomes
            if o.status in (ItemStatus.RESERVED, ItemStatus.PARTIALLY_RESERVED)
        ]
        success = flagged and not any(o.failed for o in outcomes)
        logger.info(
            "Reserved stock for order %s: %d/%d line(s) fully reserved, confirmation=%s",
            order_id,
            sum(1 for o in outcomes if o.status == ItemStatus.RESERVED),
            len(outcomes),
            needs_confirmation,
        )
        return ReservationResult(
            success=success,
            reserved_items=reserved_items,
            needs_stock_confirmation=needs_confirmation,
            outcomes=outcomes,
        )

    def _reserve_line(
        self, order_id: str, line: StockLine, actor_id: str | None
    ) -> ItemOutcome:
        requested = line.quantity.value
        try:
            record, reserved = self._apply(
                line.product_id, lambda rec: rec.reserve_up_to(requested)
            )
        except (LedgerUnavailable, ConcurrentModification) as exc:
            return self._failed(line, "reserve", exc)

        if record is None:
            logger.debug("No inventory record for product %s", line.product_id)
            return ItemOutcome(line.product_id, requested, ItemStatus.NO_RECORD)

        self._hold(order_id, line.product_id, reserved)

        if reserved == 0:
            return ItemOutcome(line.product_id, requested, ItemStatus.OUT_OF_STOCK)

        if reserved == requested:
            status = ItemStatus.RESERVED
            reason = "Reserved for order"
            notes = f"Reserved {requested} units"
        else:
            status = ItemStatus.PARTIALLY_RESERVED
            reason = "Partial reservation for order"
            notes = f"Reserved {reserved} of {requested} units"

        self._movements.record(
            MovementRecord(
                product_id=line.product_id,
                delta_qty=0,
                reason=reason,
                reference_type=ReferenceType.ORDER,
                reference_id=order_id,
                notes=notes,
                actor_id=actor_id,
            )
        )
        return ItemOutcome(line.product_id, requested, status, quantity=reserved)

    # --- Release --------------------------------------------------------------

    def release_reservation(
        self,
        order_id: str,
        lines: Iterable[StockLine],
        actor_id: str | None = None,
    ) -> BatchResult:
        """Give back reserved units, e.g. when an order is cancelled.

        When the order's reservation entry is known, whatever it actually
        holds is released (up to the requested quantity).  Reservations
        made without an entry are released only if the full quantity is
        still reserved; otherwise the line is skipped.
        """
        outcomes = [self._release_line(order_id, line, actor_id) for line in lines]
        logger.info(
            "Released reservations for order %s: %d unit(s) across %d line(s)",
            order_id,
            sum(o.quantity for o in outcomes if o.status == ItemStatus.RELEASED),
            len(outcomes),
        )
        return BatchResult(
            success=not any(o.failed for o in outcomes), outcomes=outcomes
        )

    def _release_line(
        self, order_id: str, line: StockLine, actor_id: str | None
    ) -> ItemOutcome:
        requested = line.quantity.value
        entry: ReservationEntry | None = None

        def release(rec: InventoryRecord) -> int:
            nonlocal entry
            # re-read on every attempt; a retry may follow a change to the entry
            entry = self._reservation_repo.get(order_id, line.product_id)
            if entry is not None:
                amount = min(requested, entry.quantity, rec.qty_reserved)
            elif rec.qty_reserved >= requested:
                amount = requested
            else:
                amount = 0
            if amount > 0:
                rec.release(amount)
            return amount

        try:
            record, released = self._apply(line.product_id, release)
        except (LedgerUnavailable, ConcurrentModification) as exc:
            return self._failed(line, "release", exc)

        if record is None:
            return ItemOutcome(line.product_id, requested, ItemStatus.NO_RECORD)
        if released == 0:
            logger.debug(
                "Nothing to release for order %s product %s (requested %s)",
                order_id,
                line.product_id,
                requested,
            )
            return ItemOutcome(line.product_id, requested, ItemStatus.SKIPPED)

        if entry is not None:
            entry.give_back(released)
            self._save_entry(entry)

        self._movements.record(
            MovementRecord(
                product_id=line.product_id,
                delta_qty=0,
                reason="Reservation released - order cancelled",
                reference_type=ReferenceType.CANCEL,
                reference_id=order_id,
                notes=f"Released {released} units",
                actor_id=actor_id,
            )
        )
        return ItemOutcome(line.product_id, requested, ItemStatus.RELEASED, quantity=released)

    # --- Fulfillment ----------------------------------------------------------

    def fulfill_order(
        self,
        order_id: str,
        lines: Iterable[StockLine],
        actor_id: str | None = None,
    ) -> BatchResult:
        """Commit a shipment: decrement on-hand stock and consume reservations.

        Products without an inventory record are untracked and skipped.
        Counters are floored at zero whatever the input.
        """
        outcomes = [self._fulfill_line(order_id, line, actor_id) for line in lines]
        logger.info(
            "Fulfilled order %s: %d unit(s) shipped across %d line(s)",
            order_id,
            sum(o.quantity for o in outcomes if o.status == ItemStatus.FULFILLED),
            len(outcomes),
        )
        return BatchResult(
            success=not any(o.failed for o in outcomes), outcomes=outcomes
        )

    def _fulfill_line(
        self, order_id: str, line: StockLine, actor_id: str | None
    ) -> ItemOutcome:
        requested = line.quantity.value
        entry: ReservationEntry | None = None

        def fulfill(rec: InventoryRecord) -> int:
            nonlocal entry
            entry = self._reservation_repo.get(order_id, line.product_id)
            cap = entry.quantity if entry is not None else None
            return rec.fulfill(requested, reserved_cap=cap)

        try:
            record, was_reserved = self._apply(line.product_id, fulfill)
        except (LedgerUnavailable, ConcurrentModification) as exc:
            return self._failed(line, "fulfill", exc)

        if record is None:
            logger.debug("Product %s has untracked stock, nothing to fulfill", line.product_id)
            return ItemOutcome(line.product_id, requested, ItemStatus.SKIPPED)

        if entry is not None and was_reserved:
            entry.give_back(was_reserved)
            self._save_entry(entry)

        self._movements.record(
            MovementRecord(
                product_id=line.product_id,
                delta_qty=-requested,
                reason="Order fulfilled",
                reference_type=ReferenceType.FULFILLMENT,
                reference_id=order_id,
                notes=f"Shipped/delivered {requested} units",
                actor_id=actor_id,
            )
        )
        return ItemOutcome(line.product_id, requested, ItemStatus.FULFILLED, quantity=requested)

    # --- Internal helpers -----------------------------------------------------

    def _apply(
        self, product_id: str, mutate: Callable[[InventoryRecord], T]
    ) -> tuple[InventoryRecord | None, T | None]:
        """Read-modify-write one record, retrying on version conflicts.

        Returns ``(None, None)`` when the product has no record.  The record
        is only saved if *mutate* changed one of its counters.
        """
        attempt = 0
        while True:
            attempt += 1
            record = self._inventory_repo.get_by_product_id(product_id)
            if record is None:
                return None, None
            self._warn_if_overcommitted(record)

            before = (record.qty_on_hand, record.qty_reserved)
            result = mutate(record)
            if (record.qty_on_hand, record.qty_reserved) == before:
                return record, result

            try:
                self._inventory_repo.save(record)
            except ConcurrentModification as exc:
                if attempt >= self._max_attempts:
                    raise
                logger.warning(
                    "Retrying product %s after conflict (attempt %d/%d): %s",
                    product_id,
                    attempt,
                    self._max_attempts,
                    exc,
                )
                continue
            return record, result

    def _hold(self, order_id: str, product_id: str, quantity: int) -> None:
        try:
            entry = self._reservation_repo.get(order_id, product_id)
        except LedgerUnavailable as exc:
            logger.warning(
                "Could not load reservation entry for order %s product %s: %s",
                order_id,
                product_id,
                exc,
            )
            return
        if entry is None:
            entry = ReservationEntry(order_id=order_id, product_id=product_id)
        entry.hold(quantity)
        self._save_entry(entry)

    def _save_entry(self, entry: ReservationEntry) -> None:
        # The inventory counter is already committed; a lost entry only
        # means a later release falls back to the counter check.
        try:
            self._reservation_repo.save(entry)
        except LedgerUnavailable as exc:
            logger.warning(
                "Could not save reservation entry for order %s product %s: %s",
                entry.order_id,
                entry.product_id,
                exc,
            )

    def _flag_order(self, order_id: str) -> bool:
        try:
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                logger.warning("Order %s not found; stock confirmation flag not stored", order_id)
                return True
            order.flag_for_stock_confirmation()
            self._order_repo.save(order)
        except LedgerUnavailable as exc:
            logger.error("Could not flag order %s for stock confirmation: %s", order_id, exc)
            return False
        return True

    @staticmethod
    def _failed(line: StockLine, action: str, exc: DomainException) -> ItemOutcome:
        logger.warning("Could not %s product %s: %s", action, line.product_id, exc)
        return ItemOutcome(
            product_id=line.product_id,
            requested=line.quantity.value,
            status=ItemStatus.FAILED,
            error=exc,
        )

    @staticmethod
    def _warn_if_overcommitted(record: InventoryRecord) -> None:
        if record.is_overcommitted:
            logger.warning(
                "Inventory for product %s is overcommitted: on_hand=%s reserved=%s",
                record.product_id,
                record.qty_on_hand,
                record.qty_reserved,
            )
