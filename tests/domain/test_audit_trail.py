"""The movement log must account for every change to on-hand stock."""

from stockledger.domain.model.value_objects import StockLine
from tests.fakes import make_store


def _balance(store, product_id):
    record = store.inventory.peek(product_id)
    deltas = sum(m.delta_qty for m in store.movement_log.list_for_product(product_id))
    return record.opening_quantity + deltas, record.qty_on_hand


class TestAuditTrail:

    def test_order_lifecycle_balances(self):
        store = make_store(("P1", 30, 0), ("P2", 8, 0), order_ids=("A", "B", "C"))
        ledger = store.ledger

        ledger.reserve_stock("A", [StockLine.of("P1", 10), StockLine.of("P2", 5)])
        ledger.reserve_stock("B", [StockLine.of("P1", 4), StockLine.of("P2", 5)])
        ledger.fulfill_order("A", [StockLine.of("P1", 10), StockLine.of("P2", 5)])
        ledger.release_reservation("B", [StockLine.of("P1", 4), StockLine.of("P2", 5)])
        ledger.reserve_stock("C", [StockLine.of("P1", 7)])
        ledger.fulfill_order("C", [StockLine.of("P1", 7)])

        for product_id in ("P1", "P2"):
            expected, actual = _balance(store, product_id)
            assert expected == actual
        assert store.inventory.peek("P1").qty_on_hand == 13
        assert store.inventory.peek("P1").qty_reserved == 0
        assert store.inventory.peek("P2").qty_reserved == 0

    def test_queued_movements_restore_balance_after_outage(self):
        store = make_store(("P1", 10, 0))
        store.movement_log.available = False

        store.ledger.fulfill_order("ORD-1", [StockLine.of("P1", 3)])
        expected, actual = _balance(store, "P1")
        assert expected != actual

        store.movement_log.available = True
        store.movements.flush()

        expected, actual = _balance(store, "P1")
        assert expected == actual == 7
