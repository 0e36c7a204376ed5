from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import store...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def sandbox_settings(tmp_path: Path):
    """
    Settings pointing at a temp project directory so tests never touch a real ./public or ./.hoodie.
    """
    from settings import Settings

    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<!doctype html>\n<html><body>app</body></html>\n", encoding="utf-8")
    (public / "robots.txt").write_text("User-agent: *\n", encoding="utf-8")

    data = tmp_path / ".hoodie"
    data.mkdir()
    (data / "client.js").write_text("/* hoodie client */\n", encoding="utf-8")

    return Settings(
        name="test-app",
        public_dir=public,
        data_dir=data,
        in_memory=True,
        loglevel="error",
        cors_allow_origins=("*",),
    )


@pytest.fixture(params=["memory", "disk"])
def store(request: pytest.FixtureRequest, tmp_path: Path):
    """Every ObjectStore backend; contract tests run against each."""
    from store import DiskObjectStore, InMemoryObjectStore

    if request.param == "memory":
        return InMemoryObjectStore()
    return DiskObjectStore(tmp_path / "store")
