from __future__ import annotations

import random
import re
import string
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Union

from .errors import InvalidArgumentsError, InvalidKeyError

# `$` prefixes are reserved for internal/system types.
TYPE_PATTERN = re.compile(r"^[a-z$][a-z0-9]+$")
ID_PATTERN = re.compile(r"^[a-z0-9-]+$")

UUID_ALPHABET = string.digits + string.ascii_lowercase
DEFAULT_UUID_LENGTH = 7

# Marks a retained, deleted record. Never returned from load/load_all.
DELETED_FIELD = "_deleted"

Document = dict[str, Any]


def uuid(length: int = DEFAULT_UUID_LENGTH) -> str:
    """Random id over [0-9a-z]. Not cryptographically secure."""
    return "".join(random.choice(UUID_ALPHABET) for _ in range(length))


def validate_type(type: Any) -> str:
    if not isinstance(type, str) or not TYPE_PATTERN.match(type):
        raise InvalidKeyError("type", type)
    return type


def validate_id(id: Any) -> str:
    if not isinstance(id, str) or not ID_PATTERN.match(id):
        raise InvalidKeyError("id", id)
    return id


def require_key(type: Any, id: Any) -> tuple[str, str]:
    """Validate an explicit (type, id) pair as passed to load/delete."""
    if not isinstance(type, str) or not type:
        raise InvalidArgumentsError("type must be a non-empty string")
    if not isinstance(id, str) or not id:
        raise InvalidArgumentsError("id must be a non-empty string")
    return validate_type(type), validate_id(id)


def is_tombstone(doc: Mapping[str, Any]) -> bool:
    return bool(doc.get(DELETED_FIELD))


@dataclass(frozen=True)
class AttributeMerge:
    attributes: Mapping[str, Any]

    def compute(self, current: Document) -> Mapping[str, Any] | None:
        return self.attributes


@dataclass(frozen=True)
class Transform:
    """Derive the attributes to merge from a shallow copy of the current document."""

    fn: Callable[[Document], Mapping[str, Any] | None]

    def compute(self, current: Document) -> Mapping[str, Any] | None:
        return self.fn(dict(current))


ObjectUpdate = Union[AttributeMerge, Transform]


def as_object_update(value: Any) -> ObjectUpdate:
    if isinstance(value, (AttributeMerge, Transform)):
        return value
    if isinstance(value, Mapping):
        return AttributeMerge(value)
    if callable(value):
        return Transform(value)
    raise InvalidArgumentsError("object update must be a mapping or a function")


def changed_keys(current: Mapping[str, Any], attributes: Mapping[str, Any]) -> list[str]:
    """Keys whose proposed value differs strictly: 0, False and 0.0 are all distinct."""
    return [
        k
        for k, v in attributes.items()
        if k not in current or type(current[k]) is not type(v) or current[k] != v
    ]
