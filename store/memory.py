from __future__ import annotations

import copy
from dataclasses import dataclass, field

from .documents import Document
from .object_store import ObjectStore

Key = tuple[str, str]


@dataclass
class MemoryTable:
    """Storage context owned by one InMemoryObjectStore. Records are kept in insertion order."""

    documents: dict[Key, Document] = field(default_factory=dict)
    synced: set[Key] = field(default_factory=set)


class InMemoryObjectStore(ObjectStore):
    """load_all returns documents in the order they were first saved, across all types."""

    def __init__(self, table: MemoryTable | None = None) -> None:
        self._table = table if table is not None else MemoryTable()

    @property
    def table(self) -> MemoryTable:
        return self._table

    async def _read(self, type: str, id: str) -> Document | None:
        return self._table.documents.get((type, id))

    async def _read_all(self) -> list[Document]:
        return list(self._table.documents.values())

    async def _write(self, doc: Document) -> None:
        self._table.documents[(doc["type"], doc["id"])] = copy.deepcopy(doc)

    async def _purge(self, type: str, id: str) -> None:
        self._table.documents.pop((type, id), None)
        self._table.synced.discard((type, id))

    async def _is_synced(self, type: str, id: str) -> bool:
        return (type, id) in self._table.synced

    async def _set_synced(self, type: str, id: str) -> None:
        self._table.synced.add((type, id))
