from __future__ import annotations

import logging

from settings import Settings

from .disk import DiskObjectStore
from .memory import InMemoryObjectStore
from .object_store import ObjectStore
from .paths import store_dir

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> ObjectStore:
    if settings.in_memory:
        logger.info("STORE: using in-memory store")
        return InMemoryObjectStore()
    return DiskObjectStore(store_dir(settings.data_dir))
