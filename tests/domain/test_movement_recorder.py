"""Tests for the failure-isolated movement log writer."""

import time
from concurrent.futures import ThreadPoolExecutor

from stockledger.domain.model.movement import MovementRecord, ReferenceType
from stockledger.domain.service.movement_recorder import MovementRecorder
from tests.fakes import FakeMovementRepository


def _movement(product_id: str, delta: int = 0) -> MovementRecord:
    return MovementRecord(
        product_id=product_id,
        delta_qty=delta,
        reason="test",
        reference_type=ReferenceType.MANUAL,
    )


class TestMovementRecorder:

    def test_appends_directly(self):
        repo = FakeMovementRepository()
        recorder = MovementRecorder(repo)

        assert recorder.record(_movement("P1")) is True
        assert len(repo.entries) == 1
        assert recorder.pending == 0

    def test_queues_when_log_unavailable(self):
        repo = FakeMovementRepository()
        repo.available = False
        recorder = MovementRecorder(repo)

        assert recorder.record(_movement("P1")) is False
        assert recorder.pending == 1
        assert repo.entries == []

    def test_queue_flushed_before_next_append_in_order(self):
        repo = FakeMovementRepository()
        recorder = MovementRecorder(repo)
        repo.available = False
        recorder.record(_movement("P1"))
        recorder.record(_movement("P2"))

        repo.available = True
        recorder.record(_movement("P3"))

        assert [m.product_id for m in repo.entries] == ["P1", "P2", "P3"]
        assert recorder.pending == 0

    def test_flush_reports_written(self):
        repo = FakeMovementRepository()
        recorder = MovementRecorder(repo)
        repo.available = False
        recorder.record(_movement("P1"))

        assert recorder.flush() == 0
        repo.available = True
        assert recorder.flush() == 1
        assert recorder.flush() == 0


class SlowMovementRepository(FakeMovementRepository):
    """Append that yields mid-write so concurrent flushes overlap."""

    def append(self, movement):
        time.sleep(0.01)
        super().append(movement)


class TestMovementRecorderThreads:

    def test_concurrent_flushes_write_each_movement_once(self):
        repo = SlowMovementRepository()
        recorder = MovementRecorder(repo)
        repo.available = False
        recorder.record(_movement("P1", -1))
        recorder.record(_movement("P2", -2))
        repo.available = True

        with ThreadPoolExecutor(max_workers=4) as pool:
            written = list(pool.map(lambda _: recorder.flush(), range(4)))

        assert [m.product_id for m in repo.entries] == ["P1", "P2"]
        assert sum(written) == 2
        assert recorder.pending == 0

    def test_concurrent_records_keep_every_movement(self):
        repo = SlowMovementRepository()
        recorder = MovementRecorder(repo)
        repo.available = False
        recorder.record(_movement("Q0"))
        repo.available = True

        with ThreadPoolExecutor(max_workers=4) as pool:
            list(pool.map(lambda i: recorder.record(_movement(f"P{i}")), range(8)))

        ids = [m.product_id for m in repo.entries]
        assert ids[0] == "Q0"
        assert sorted(ids[1:]) == sorted(f"P{i}" for i in range(8))
        assert recorder.pending == 0
