from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

from json_store import atomic_write_json, read_json

from .interfaces import KeyValueDocumentStore
from .locks import PathLockRegistry


class DiskJsonDocumentStore(KeyValueDocumentStore):
    """
    Stores a single JSON document on disk at a fixed path.

    - Always returns a dict (empty dict on missing/invalid JSON).
    - Writes atomically.
    - Instances sharing a PathLockRegistry serialize access to the same path.
    """

    def __init__(self, path: Path, locks: PathLockRegistry | None = None, *, sort_keys: bool = True):
        self._path = path
        self._sort_keys = sort_keys
        self._locks = locks if locks is not None else PathLockRegistry()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any]:
        lock = self._locks.lock_for(self._path)
        with lock:
            return self._load_unlocked()

    def save(self, doc: dict[str, Any]) -> None:
        lock = self._locks.lock_for(self._path)
        with lock:
            atomic_write_json(self._path, doc, sort_keys=self._sort_keys)

    def modify(self, fn: Callable[[dict[str, Any]], dict[str, Any] | None]) -> None:
        lock = self._locks.lock_for(self._path)
        with lock:
            doc = fn(self._load_unlocked())
            if doc is None:
                self._path.unlink(missing_ok=True)
            else:
                atomic_write_json(self._path, doc, sort_keys=self._sort_keys)

    def _load_unlocked(self) -> dict[str, Any]:
        raw = read_json(self._path)
        return raw if isinstance(raw, dict) else {}
