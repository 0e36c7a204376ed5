from __future__ import annotations

import asyncio
import copy
import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Iterable, Mapping, Union

from .documents import (
    DELETED_FIELD,
    AttributeMerge,
    Document,
    as_object_update,
    changed_keys,
    is_tombstone,
    require_key,
    uuid,
    validate_id,
    validate_type,
)
from .errors import InvalidArgumentsError, NotFoundError, UpdateAllError

logger = logging.getLogger(__name__)

LoadAllFilter = Union[str, Callable[[Document], bool], None]
UpdateTargets = Union[str, Awaitable[Iterable[Document]], Iterable[Document], None]


class ObjectStore(ABC):
    """
    Type/id addressed document store.

    Validation, id generation, update diffing and the tombstone-vs-purge
    policy live here. Backends only implement raw record access:

      _read(type, id)       -> stored record (tombstones included) or None
      _read_all()           -> every stored record, tombstones included
      _write(doc)           -> persist a full record
      _purge(type, id)      -> drop a record and its sync marker
      _is_synced(type, id)  -> whether the record was pushed to a remote
      _set_synced(type, id) -> record that it was

    Same-key operations are not serialized; callers that need ordering must
    await one operation before issuing the next.
    """

    uuid = staticmethod(uuid)

    # -------------------------------------------------------------------
    # Backend hooks
    # -------------------------------------------------------------------
    @abstractmethod
    async def _read(self, type: str, id: str) -> Document | None: ...

    @abstractmethod
    async def _read_all(self) -> list[Document]: ...

    @abstractmethod
    async def _write(self, doc: Document) -> None: ...

    @abstractmethod
    async def _purge(self, type: str, id: str) -> None: ...

    @abstractmethod
    async def _is_synced(self, type: str, id: str) -> bool: ...

    @abstractmethod
    async def _set_synced(self, type: str, id: str) -> None: ...

    # -------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------
    async def save(self, type: str, id: str | None, obj: Mapping[str, Any], **options: Any) -> Document:
        """Write `obj` at (type, id), replacing any existing record. A missing id is generated."""
        if not isinstance(obj, Mapping):
            raise InvalidArgumentsError("object must be a mapping")

        if not id:
            id = self.uuid()
        validate_id(id)
        validate_type(type)

        doc = copy.deepcopy(dict(obj))
        doc.pop(DELETED_FIELD, None)
        doc["type"] = type
        doc["id"] = id

        await self._write(doc)
        logger.debug("STORE SAVE: type=%s id=%s", type, id)
        return copy.deepcopy(doc)

    async def create(self, type: str, obj: Mapping[str, Any], **options: Any) -> Document:
        return await self.save(type, None, obj, **options)

    async def update(self, type: str, id: str, object_update: Any, **options: Any) -> Document:
        """
        Merge attributes into the document at (type, id).

        `object_update` is an attribute mapping, or a function that receives a
        shallow copy of the current document and returns the attributes to
        merge. A falsy result, or attributes identical to the stored values,
        resolve with the current document without writing.

        When no document exists the update is saved as a new one (upsert).
        """
        update = as_object_update(object_update)

        try:
            current = await self.load(type, id)
        except NotFoundError:
            if isinstance(update, AttributeMerge):
                initial = update.attributes
            else:
                initial = _checked(update.compute({}))
                if not initial:
                    raise
            logger.debug("STORE UPDATE: %s/%s not found, creating", type, id)
            return await self.save(type, id, initial, **options)

        attributes = _checked(update.compute(current))
        if not attributes:
            return current

        if not changed_keys(current, attributes):
            logger.debug("STORE UPDATE: %s/%s unchanged, skipping write", type, id)
            return current

        current.update(attributes)
        return await self.save(type, id, current, **options)

    async def update_all(
        self,
        filter_or_objects: UpdateTargets,
        object_update: Any,
        **options: Any,
    ) -> list[Document]:
        """
        Apply `object_update` to every target document concurrently.

        Targets are all documents of a type (str), the documents an awaitable
        resolves to, an explicit sequence of documents, or every document (None).
        All sub-updates settle before this returns; if any failed an
        UpdateAllError carrying every outcome is raised.
        """
        update = as_object_update(object_update)
        targets = await self._resolve_targets(filter_or_objects)

        results = await asyncio.gather(
            *(self.update(doc["type"], doc["id"], update, **options) for doc in targets),
            return_exceptions=True,
        )
        if any(isinstance(r, BaseException) for r in results):
            err = UpdateAllError(list(results))
            logger.warning("STORE UPDATE ALL: %s", err)
            raise err
        return list(results)

    async def load(self, type: str, id: str) -> Document:
        type, id = require_key(type, id)
        doc = await self._read(type, id)
        if doc is None or is_tombstone(doc):
            raise NotFoundError(type, id)
        return copy.deepcopy(doc)

    async def load_all(self, filter: LoadAllFilter = None) -> list[Document]:
        """
        Live documents, optionally limited to one type or to those matching a predicate.

        Order is backend-defined. Documents of one type always come back in the
        order they were first saved; see each backend for the order across types.
        """
        docs = [d for d in await self._read_all() if not is_tombstone(d)]
        if isinstance(filter, str):
            docs = [d for d in docs if d.get("type") == filter]
        elif callable(filter):
            docs = [d for d in docs if filter(d)]
        elif filter is not None:
            raise InvalidArgumentsError("filter must be a type, a function or None")
        return copy.deepcopy(docs)

    async def delete(self, type: str, id: str, **options: Any) -> Document:
        """
        Remove the document at (type, id) and return it.

        Documents already synced to a remote counterpart are kept as
        tombstones so the deletion can propagate; anything else is purged.
        """
        doc = await self.load(type, id)
        if await self._is_synced(type, id):
            await self._write({**doc, DELETED_FIELD: True})
            logger.info("STORE DELETE: %s/%s kept as tombstone", type, id)
        else:
            await self._purge(type, id)
            logger.debug("STORE DELETE: %s/%s purged", type, id)
        return doc

    destroy = delete

    async def delete_all(self, type: str | None = None, **options: Any) -> list[Document]:
        if type is not None:
            validate_type(type)
        docs = await self.load_all(type)
        return list(await asyncio.gather(*(self.delete(d["type"], d["id"], **options) for d in docs)))

    destroy_all = delete_all

    async def mark_synced(self, type: str, id: str) -> None:
        """Record that the live document at (type, id) exists on a remote counterpart."""
        await self.load(type, id)
        await self._set_synced(type, id)

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    async def _resolve_targets(self, filter_or_objects: UpdateTargets) -> list[Document]:
        if filter_or_objects is None:
            return await self.load_all()
        if isinstance(filter_or_objects, str):
            return await self.load_all(validate_type(filter_or_objects))
        if inspect.isawaitable(filter_or_objects):
            return _checked_targets(await filter_or_objects)
        if isinstance(filter_or_objects, Mapping):
            raise InvalidArgumentsError("expected a sequence of documents, got a single mapping")
        return _checked_targets(filter_or_objects)


def _checked(attributes: Any) -> Mapping[str, Any] | None:
    if attributes and not isinstance(attributes, Mapping):
        raise InvalidArgumentsError("object update function must return a mapping or a falsy value")
    return attributes


def _checked_targets(docs: Any) -> list[Document]:
    if not isinstance(docs, Iterable):
        raise InvalidArgumentsError("targets must be a type, a sequence of documents or None")
    targets = list(docs)
    for doc in targets:
        if not isinstance(doc, Mapping) or "type" not in doc or "id" not in doc:
            raise InvalidArgumentsError("target documents must carry type and id")
    return targets
