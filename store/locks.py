from __future__ import annotations

import threading
from pathlib import Path


class PathLockRegistry:
    """
    One lock per resolved file path. Owned by a DiskDocumentTable, never shared globally.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Path, threading.Lock] = {}

    def lock_for(self, path: Path) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(path.resolve(), threading.Lock())
