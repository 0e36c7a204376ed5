from __future__ import annotations

from typing import Any


class StoreError(Exception):
    """Base error for all store operations."""

    kind = "STORE_ERROR"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": str(self)}


class InvalidArgumentsError(StoreError, ValueError):
    """A required argument is missing or has the wrong shape."""

    kind = "INVALID_ARGUMENTS"


class InvalidKeyError(StoreError, ValueError):
    """A type or id does not match its identifier pattern."""

    kind = "INVALID_KEY"

    def __init__(self, field: str, value: Any):
        super().__init__(f"invalid {field}: {value!r}")
        self.field = field
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "field": self.field, "value": self.value}


class NotFoundError(StoreError, LookupError):
    """No live document exists at (type, id)."""

    kind = "NOT_FOUND"

    def __init__(self, type: str, id: str):
        super().__init__(f"{type} with id {id!r} not found")
        self.type = type
        self.id = id

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "type": self.type, "id": self.id}


class UpdateAllError(StoreError):
    """
    Raised by update_all once every sub-update has settled and at least one failed.

    `results` holds one entry per target, in target order: the updated document,
    or the exception that sub-update raised.
    """

    kind = "UPDATE_ALL_FAILED"

    def __init__(self, results: list[Any]):
        self.results = results
        self.errors = [r for r in results if isinstance(r, BaseException)]
        super().__init__(f"{len(self.errors)} of {len(results)} updates failed")

    @property
    def updated(self) -> list[dict[str, Any]]:
        return [r for r in self.results if not isinstance(r, BaseException)]

    def to_dict(self) -> dict[str, Any]:
        errors = [e.to_dict() if isinstance(e, StoreError) else {"message": str(e)} for e in self.errors]
        return {**super().to_dict(), "errors": errors}
