"""Tests for releasing reservations."""

from stockledger.domain.model.movement import ReferenceType
from stockledger.domain.model.reservation import ReservationEntry
from stockledger.domain.model.results import ItemStatus
from stockledger.domain.model.value_objects import StockLine
from tests.fakes import FakeReservationRepository, make_store


class TestReleaseWithoutReservationEntry:
    """Reservations made before the order had an entry on file."""

    def test_release_exact_reserved_zeroes_it(self):
        store = make_store(("P1", 10, 2))

        result = store.ledger.release_reservation("ORD-1", [StockLine.of("P1", 2)])

        assert result
        assert store.inventory.peek("P1").qty_reserved == 0
        [movement] = store.movement_log.entries
        assert movement.reference_type == ReferenceType.CANCEL
        assert movement.delta_qty == 0
        assert movement.reason == "Reservation released - order cancelled"
        assert movement.notes == "Released 2 units"

    def test_release_more_than_reserved_is_skipped(self):
        store = make_store(("P1", 10, 2))

        result = store.ledger.release_reservation("ORD-1", [StockLine.of("P1", 5)])

        assert result.success
        assert result.outcomes[0].status == ItemStatus.SKIPPED
        assert store.inventory.peek("P1").qty_reserved == 2
        assert store.inventory.saves == 0
        assert store.movement_log.entries == []

    def test_missing_record(self):
        store = make_store()

        result = store.ledger.release_reservation("ORD-1", [StockLine.of("P1", 1)])

        assert result.outcomes[0].status == ItemStatus.NO_RECORD


class TestReleaseWithReservationEntry:

    def test_partial_reservation_is_fully_reversed(self):
        store = make_store(("P1", 10, 8))
        store.ledger.reserve_stock("ORD-1", [StockLine.of("P1", 5)])  # gets 2

        result = store.ledger.release_reservation("ORD-1", [StockLine.of("P1", 5)])

        assert result.outcomes[0].status == ItemStatus.RELEASED
        assert result.outcomes[0].quantity == 2
        assert store.inventory.peek("P1").qty_reserved == 8
        assert store.reservations.get("ORD-1", "P1").quantity == 0

    def test_second_cancel_does_not_free_other_orders_stock(self):
        store = make_store(("P1", 10, 6))
        store.ledger.reserve_stock("ORD-1", [StockLine.of("P1", 3)])

        store.ledger.release_reservation("ORD-1", [StockLine.of("P1", 3)])
        again = store.ledger.release_reservation("ORD-1", [StockLine.of("P1", 3)])

        assert again.outcomes[0].status == ItemStatus.SKIPPED
        assert store.inventory.peek("P1").qty_reserved == 6

    def test_order_that_reserved_nothing_releases_nothing(self):
        store = make_store(("P1", 4, 4))
        store.ledger.reserve_stock("ORD-1", [StockLine.of("P1", 2)])

        result = store.ledger.release_reservation("ORD-1", [StockLine.of("P1", 2)])

        assert result.outcomes[0].status == ItemStatus.SKIPPED
        assert store.inventory.peek("P1").qty_reserved == 4

    def test_release_limited_to_counter(self):
        store = make_store(("P1", 10, 1))
        store.reservations = FakeReservationRepository(
            [ReservationEntry(order_id="ORD-1", product_id="P1", quantity=3)]
        )
        store.__post_init__()

        result = store.ledger.release_reservation("ORD-1", [StockLine.of("P1", 3)])

        assert result.outcomes[0].quantity == 1
        assert store.inventory.peek("P1").qty_reserved == 0

    def test_store_failure_reported_per_item(self):
        store = make_store(("P1", 10, 2), ("P2", 10, 2))
        store.inventory.unavailable.add("P1")

        result = store.ledger.release_reservation(
            "ORD-1", [StockLine.of("P1", 2), StockLine.of("P2", 2)]
        )

        assert not result
        assert [o.status for o in result.outcomes] == [ItemStatus.FAILED, ItemStatus.RELEASED]
        assert store.inventory.peek("P2").qty_reserved == 0


class TestReleaseRetry:

    def test_retry_uses_current_reservation_entry(self):
        store = make_store(("P1", 20, 0), order_ids=("ORD-1", "ORD-2"))
        store.ledger.reserve_stock("ORD-1", [StockLine.of("P1", 4)])
        store.ledger.reserve_stock("ORD-2", [StockLine.of("P1", 5)])

        def ship_first(product_id):
            store.inventory.after_read = None
            store.ledger.fulfill_order("ORD-1", [StockLine.of(product_id, 4)])

        store.inventory.after_read = ship_first

        result = store.ledger.release_reservation("ORD-1", [StockLine.of("P1", 4)])

        assert result.outcomes[0].status == ItemStatus.SKIPPED
        assert store.inventory.peek("P1").qty_reserved == 5
        assert store.reservations.get("ORD-1", "P1").quantity == 0
