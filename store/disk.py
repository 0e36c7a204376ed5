from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, Field

from .disk_store import DiskJsonDocumentStore
from .documents import Document
from .locks import PathLockRegistry
from .object_store import ObjectStore
from .paths import ensure_dir, type_file

logger = logging.getLogger(__name__)


class TypeFileDoc(BaseModel):
    """
    On-disk schema of one <type>.json file:
      { "documents": { "<id>": {...} }, "synced": ["<id>", ...] }
    """

    documents: dict[str, dict[str, Any]] = Field(default_factory=dict)
    synced: list[str] = Field(default_factory=list)

    @classmethod
    def from_disk_doc(cls, doc: Mapping[str, Any]) -> "TypeFileDoc":
        return cls.model_validate(doc)

    def to_disk_doc(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class DiskDocumentTable:
    """
    Blocking access to the per-type files under `root`.

    Each file's read-modify-write runs under that file's path lock.
    """

    def __init__(self, root: Path):
        self._root = ensure_dir(root)
        self._locks = PathLockRegistry()

    @property
    def root(self) -> Path:
        return self._root

    def _file(self, type: str) -> DiskJsonDocumentStore:
        # Unsorted keys keep documents in the order they were first saved.
        return DiskJsonDocumentStore(type_file(self._root, type), self._locks, sort_keys=False)

    def _load(self, type: str) -> TypeFileDoc:
        return TypeFileDoc.from_disk_doc(self._file(type).load())

    def read(self, type: str, id: str) -> Document | None:
        return self._load(type).documents.get(id)

    def read_all(self) -> list[Document]:
        docs: list[Document] = []
        for path in sorted(self._root.glob("*.json")):
            docs.extend(self._load(path.stem).documents.values())
        return docs

    def write(self, doc: Document) -> None:
        def _apply(raw: dict[str, Any]) -> dict[str, Any]:
            state = TypeFileDoc.from_disk_doc(raw)
            state.documents[doc["id"]] = doc
            return state.to_disk_doc()

        self._file(doc["type"]).modify(_apply)

    def purge(self, type: str, id: str) -> None:
        def _apply(raw: dict[str, Any]) -> dict[str, Any] | None:
            state = TypeFileDoc.from_disk_doc(raw)
            state.documents.pop(id, None)
            state.synced = [s for s in state.synced if s != id]
            if not state.documents:
                return None
            return state.to_disk_doc()

        self._file(type).modify(_apply)

    def is_synced(self, type: str, id: str) -> bool:
        return id in self._load(type).synced

    def set_synced(self, type: str, id: str) -> None:
        def _apply(raw: dict[str, Any]) -> dict[str, Any]:
            state = TypeFileDoc.from_disk_doc(raw)
            if id not in state.synced:
                state.synced.append(id)
            return state.to_disk_doc()

        self._file(type).modify(_apply)


class DiskObjectStore(ObjectStore):
    """
    File-backed ObjectStore: one JSON file per document type.
    load_all returns types in name order, and each type in the order its documents were first saved.
    Uses asyncio.to_thread to avoid blocking the event loop on file I/O.
    """

    def __init__(self, root: Path) -> None:
        self._table = DiskDocumentTable(root)
        logger.info("STORE: using disk store at %s", self._table.root)

    @property
    def root(self) -> Path:
        return self._table.root

    async def _read(self, type: str, id: str) -> Document | None:
        return await asyncio.to_thread(self._table.read, type, id)

    async def _read_all(self) -> list[Document]:
        return await asyncio.to_thread(self._table.read_all)

    async def _write(self, doc: Document) -> None:
        await asyncio.to_thread(self._table.write, doc)

    async def _purge(self, type: str, id: str) -> None:
        await asyncio.to_thread(self._table.purge, type, id)

    async def _is_synced(self, type: str, id: str) -> bool:
        return await asyncio.to_thread(self._table.is_synced, type, id)

    async def _set_synced(self, type: str, id: str) -> None:
        await asyncio.to_thread(self._table.set_synced, type, id)
