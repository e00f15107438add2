"""Domain service: Movement Recorder.

Appends audit entries to the movement log on behalf of stock mutations.
A failed append never undoes the mutation it describes; the movement is
queued and written ahead of the next append (or on ``flush()``) so the
log catches up once the store is reachable again.

One recorder is shared by every thread using the ledger.  The queue and
the appends it drives are serialized on a single lock, so a queued
movement is written exactly once.
"""

from __future__ import annotations

import logging
import threading
from collections import deque

from stockledger.domain.exceptions import LedgerUnavailable
from stockledger.domain.model.movement import MovementRecord
from stockledger.domain.repository.movement_repository import MovementRepository

logger = logging.getLogger(__name__)


class MovementRecorder:

    def __init__(self, movement_repo: MovementRepository) -> None:
        self._movement_repo = movement_repo
        self._pending: deque[MovementRecord] = deque()
        self._lock = threading.RLock()

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._pending)

    def record(self, movement: MovementRecord) -> bool:
        """Append *movement*, queueing it if the log cannot be written.

        Returns True when the movement reached the log immediately.
        """
        with self._lock:
            self.flush()
            if self._pending:
                # keep log order: nothing jumps the queue
                self._pending.append(movement)
                return False
            try:
                self._movement_repo.append(movement)
            except LedgerUnavailable as exc:
                logger.warning(
                    "Movement log unavailable, queued %s movement for product %s: %s",
                    movement.reference_type.value,
                    movement.product_id,
                    exc,
                )
                self._pending.append(movement)
                return False
            return True

    def flush(self) -> int:
        """Write queued movements oldest first; stop at the first failure.

        Returns how many were written.
        """
        written = 0
        with self._lock:
            while self._pending:
                movement = self._pending[0]
                try:
                    self._movement_repo.append(movement)
                except LedgerUnavailable as exc:
                    logger.debug(
                        "Movement log still unavailable (%d queued): %s", len(self._pending), exc
                    )
                    break
                self._pending.popleft()
                written += 1
        if written:
            logger.info("Flushed %d queued movement(s)", written)
        return written
