from __future__ import annotations

from typing import Any, Callable, Protocol


class KeyValueDocumentStore(Protocol):
    """
    A single JSON-like document persisted under a key (one file per document type).
    """

    def load(self) -> dict[str, Any]:
        """Load and return the full document (never None)."""
        ...

    def save(self, doc: dict[str, Any]) -> None:
        """Persist the full document atomically."""
        ...

    def modify(self, fn: Callable[[dict[str, Any]], dict[str, Any] | None]) -> None:
        """Load, apply `fn` and save as one step. `fn` returning None drops the document."""
        ...
