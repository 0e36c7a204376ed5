from __future__ import annotations

from pathlib import Path


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def store_dir(data_dir: Path) -> Path:
    return ensure_dir(data_dir / "store")


def type_file(root: Path, type: str) -> Path:
    # Type names are already restricted to [a-z0-9$].
    return root / f"{type}.json"
