"""Tests for order fulfillment."""

from stockledger.domain.model.movement import ReferenceType
from stockledger.domain.model.results import ItemStatus
from stockledger.domain.model.value_objects import StockLine
from tests.fakes import make_store


class TestFulfillOrder:

    def test_fulfill_more_than_reserved(self):
        store = make_store(("P1", 10, 4))

        result = store.ledger.fulfill_order("ORD-1", [StockLine.of("P1", 6)], actor_id="u9")

        assert result
        record = store.inventory.peek("P1")
        assert record.qty_on_hand == 4
        assert record.qty_reserved == 0
        [movement] = store.movement_log.entries
        assert movement.delta_qty == -6
        assert movement.reference_type == ReferenceType.FULFILLMENT
        assert movement.reason == "Order fulfilled"
        assert movement.notes == "Shipped/delivered 6 units"
        assert movement.actor_id == "u9"

    def test_untracked_product_is_skipped(self):
        store = make_store()

        result = store.ledger.fulfill_order("ORD-1", [StockLine.of("LEGACY", 2)])

        assert result.success
        assert result.outcomes[0].status == ItemStatus.SKIPPED
        assert store.movement_log.entries == []

    def test_counters_floor_at_zero(self):
        store = make_store(("P1", 3, 1))

        store.ledger.fulfill_order("ORD-1", [StockLine.of("P1", 10)])

        record = store.inventory.peek("P1")
        assert record.qty_on_hand == 0
        assert record.qty_reserved == 0

    def test_consumes_only_this_orders_reservation(self):
        store = make_store(("P1", 20, 6), order_ids=("ORD-1", "ORD-2"))
        store.ledger.reserve_stock("ORD-2", [StockLine.of("P1", 2)])

        store.ledger.fulfill_order("ORD-2", [StockLine.of("P1", 5)])

        record = store.inventory.peek("P1")
        assert record.qty_on_hand == 15
        assert record.qty_reserved == 6
        assert store.reservations.get("ORD-2", "P1").quantity == 0

    def test_reserve_then_fulfill(self):
        store = make_store(("P1", 10, 0))
        store.ledger.reserve_stock("ORD-1", [StockLine.of("P1", 4)])

        store.ledger.fulfill_order("ORD-1", [StockLine.of("P1", 4)])

        record = store.inventory.peek("P1")
        assert record.qty_on_hand == 6
        assert record.qty_reserved == 0
        assert record.available_quantity == 6

    def test_failure_does_not_stop_batch(self):
        store = make_store(("P1", 10, 0), ("P2", 10, 0))
        store.inventory.unavailable.add("P1")

        result = store.ledger.fulfill_order(
            "ORD-1", [StockLine.of("P1", 1), StockLine.of("P2", 1)]
        )

        assert result.success is False
        assert len(result.failures) == 1
        assert store.inventory.peek("P2").qty_on_hand == 9


class TestFulfillRetry:

    def test_retry_uses_current_reservation_entry(self):
        store = make_store(("P1", 20, 0), order_ids=("ORD-1", "ORD-2"))
        store.ledger.reserve_stock("ORD-1", [StockLine.of("P1", 4)])
        store.ledger.reserve_stock("ORD-2", [StockLine.of("P1", 5)])

        def cancel_first(product_id):
            store.inventory.after_read = None
            store.ledger.release_reservation("ORD-1", [StockLine.of(product_id, 4)])

        store.inventory.after_read = cancel_first

        result = store.ledger.fulfill_order("ORD-1", [StockLine.of("P1", 3)])

        assert result.outcomes[0].status == ItemStatus.FULFILLED
        record = store.inventory.peek("P1")
        assert record.qty_on_hand == 17
        assert record.qty_reserved == 5
        assert store.reservations.get("ORD-2", "P1").quantity == 5
