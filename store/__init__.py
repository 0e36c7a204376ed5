from __future__ import annotations

from .disk import DiskObjectStore
from .documents import AttributeMerge, Document, ObjectUpdate, Transform, uuid
from .errors import (
    InvalidArgumentsError,
    InvalidKeyError,
    NotFoundError,
    StoreError,
    UpdateAllError,
)
from .factory import build_store
from .memory import InMemoryObjectStore, MemoryTable
from .object_store import ObjectStore

__all__ = [
    "ObjectStore",
    "InMemoryObjectStore",
    "MemoryTable",
    "DiskObjectStore",
    "build_store",
    "Document",
    "ObjectUpdate",
    "AttributeMerge",
    "Transform",
    "uuid",
    "StoreError",
    "InvalidArgumentsError",
    "InvalidKeyError",
    "NotFoundError",
    "UpdateAllError",
]
