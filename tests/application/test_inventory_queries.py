"""Tests for the inventory, movement and audit queries."""

from stockledger.application.receive_stock import ReceiveStockHandler
from stockledger.application.show_inventory import ShowInventoryHandler
from stockledger.application.show_movements import ShowMovementsHandler
from stockledger.application.verify_ledger import VerifyLedgerHandler
from stockledger.domain.model.inventory import InventoryRecord
from stockledger.domain.model.product import Product
from stockledger.domain.model.value_objects import StockLine
from tests.fakes import FakeInventoryRepository, make_store


class TestShowInventory:

    def _store(self):
        return make_store(
            ("B", 10, 8),
            ("A", 20, 0),
            ("C", 3, 3),
            products=[Product(id="A", name="Alpha"), Product(id="B", name="Beta")],
        )

    def test_lines_sorted_with_status(self):
        store = self._store()

        lines = ShowInventoryHandler(store.inventory, store.products).handle()

        assert [line.product_id for line in lines] == ["A", "B", "C"]
        by_id = {line.product_id: line for line in lines}
        assert by_id["A"].status == "IN_STOCK"
        assert by_id["B"].status == "LOW_STOCK"
        assert by_id["B"].available == 2
        assert by_id["C"].status == "OUT_OF_STOCK"
        assert by_id["A"].product_name == "Alpha"
        assert by_id["C"].product_name == ""

    def test_low_stock_only(self):
        store = self._store()

        lines = ShowInventoryHandler(store.inventory, store.products).handle(
            low_stock_only=True
        )

        assert [line.product_id for line in lines] == ["B", "C"]

    def test_threshold_is_configurable(self):
        store = self._store()

        lines = ShowInventoryHandler(
            store.inventory, store.products, low_stock_threshold=2
        ).handle()

        assert {line.product_id: line.status for line in lines}["B"] == "IN_STOCK"


class TestShowMovements:

    def test_most_recent_first_and_filtered(self):
        store = make_store(("P1", 10, 0), ("P2", 10, 0))
        store.ledger.reserve_stock("ORD-1", [StockLine.of("P1", 1)])
        store.ledger.reserve_stock("ORD-1", [StockLine.of("P2", 1)])
        store.ledger.fulfill_order("ORD-1", [StockLine.of("P1", 1)])
        handler = ShowMovementsHandler(store.movement_log)

        everything = handler.handle()
        p1_only = handler.handle(product_id="P1")

        assert [m.reference_type for m in everything] == ["fulfillment", "order", "order"]
        assert [m.product_id for m in p1_only] == ["P1", "P1"]
        assert p1_only[0].delta == -1
        assert p1_only[0].reference_id == "ORD-1"

    def test_limit(self):
        store = make_store(("P1", 10, 0))
        for _ in range(5):
            store.ledger.reserve_stock("ORD-1", [StockLine.of("P1", 1)])

        assert len(ShowMovementsHandler(store.movement_log).handle(limit=3)) == 3


class TestVerifyLedger:

    def test_clean_ledger(self):
        store = make_store(("P1", 10, 0), products=[Product(id="P2", name="New")])
        ReceiveStockHandler(store.inventory, store.products, store.movements).handle("P2", 4)
        store.ledger.reserve_stock("ORD-1", [StockLine.of("P1", 2)])
        store.ledger.fulfill_order("ORD-1", [StockLine.of("P1", 2)])

        assert VerifyLedgerHandler(store.inventory, store.movement_log).handle() == []

    def test_reports_unexplained_stock(self):
        store = make_store()
        store.inventory = FakeInventoryRepository(
            [InventoryRecord(product_id="P1", qty_on_hand=7, opening_quantity=5)]
        )

        [problem] = VerifyLedgerHandler(store.inventory, store.movement_log).handle()

        assert problem.product_id == "P1"
        assert problem.expected_on_hand == 5
        assert "movements account for 5" in problem.problem

    def test_reports_overcommitted_record(self):
        store = make_store(("P1", 2, 5))

        [problem] = VerifyLedgerHandler(store.inventory, store.movement_log).handle()

        assert problem.problem == "reserved exceeds on hand"
