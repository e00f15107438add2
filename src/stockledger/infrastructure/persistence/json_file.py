"""Shared file helpers for the JSON-backed repositories.

Each data file is a JSON list of records.  Read or write failures surface
as LedgerUnavailable so the domain can tell a broken store from an empty
one.  Access from the same process is serialized on one lock per file,
and writes replace the file atomically.
"""

from __future__ import annotations

import json
import os
import threading
from pathlib import Path

from stockledger.domain.exceptions import LedgerUnavailable

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _locks_guard:
        return _locks.setdefault(path, threading.RLock())


class JsonFile:
    """One JSON data file.

    *required* names the keys every row must carry; a file that is not a
    list of such rows is treated as unreadable.
    """

    def __init__(self, file_path: Path, required: tuple[str, ...] = ()) -> None:
        self.path = file_path.resolve()
        self.required = required
        self.lock = _lock_for(self.path)
        self._ensure_file()

    def load(self) -> list[dict]:
        with self.lock:
            try:
                rows = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise LedgerUnavailable(f"Cannot read {self.path.name}: {exc}") from exc
        self._check_shape(rows)
        return rows

    def _check_shape(self, rows: object) -> None:
        if not isinstance(rows, list):
            raise LedgerUnavailable(f"Cannot read {self.path.name}: expected a list of rows")
        for i, row in enumerate(rows):
            if not isinstance(row, dict):
                raise LedgerUnavailable(f"Cannot read {self.path.name}: row {i} is not an object")
            missing = [key for key in self.required if key not in row]
            if missing:
                raise LedgerUnavailable(
                    f"Cannot read {self.path.name}: row {i} lacks {', '.join(missing)}"
                )

    def persist(self, records: list[dict]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with self.lock:
            try:
                tmp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
                os.replace(tmp_path, self.path)
            except OSError as exc:
                raise LedgerUnavailable(f"Cannot write {self.path.name}: {exc}") from exc

    def _ensure_file(self) -> None:
        if self.path.exists():
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise LedgerUnavailable(f"Cannot create {self.path.name}: {exc}") from exc
