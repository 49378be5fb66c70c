"""A JSON document on disk guarded by a per-file lock.

Every repository bound to the same path shares one lock, so a
read-modify-write done inside ``transaction()`` is atomic with respect to
every other writer in the process.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

_LOCKS: dict[Path, threading.RLock] = {}
_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    key = path.resolve()
    with _LOCKS_GUARD:
        lock = _LOCKS.get(key)
        if lock is None:
            lock = _LOCKS[key] = threading.RLock()
        return lock


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()
        self._lock = _lock_for(file_path)

    def read(self) -> list[dict]:
        with self._lock:
            return json.loads(self._file_path.read_text(encoding="utf-8"))

    @contextmanager
    def transaction(self) -> Iterator[list[dict]]:
        """Yield the records for in-place edits; write them back on success."""
        with self._lock:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
            yield records
            self._write(records)

    def _write(self, records: list[dict]) -> None:
        tmp = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        tmp.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        tmp.replace(self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
