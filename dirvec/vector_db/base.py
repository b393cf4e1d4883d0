# dirvec/vector_db/base.py
"""
Base types for vector index adapters.

Adapters are treated as a black box by the sync core beyond
insert / delete / persist / query.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class VectorDocument:
    """One file's full text, keyed by its absolute path."""

    id: str
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class SearchResult:
    """
    Canonical vector search hit shape.

    - id: document id (absolute file path)
    - score: cosine similarity, higher is closer
    - payload: {"content": ..., "source": ...}
    """

    id: str
    score: float
    payload: dict[str, Any]

    @property
    def content(self) -> str:
        return self.payload.get("content", "")

    @property
    def source(self) -> str:
        return self.payload.get("source", self.id)


@runtime_checkable
class VectorIndex(Protocol):
    """Protocol for the mutable, persistable vector index used by a sync run."""

    async def insert(self, document: VectorDocument) -> None:
        """Embed and add one document."""
        ...

    async def delete(self, doc_id: str) -> bool:
        """Remove a document. Unknown ids return False and are not an error."""
        ...

    async def persist(self, storage_path: str | Path) -> None:
        """Write the full index state to durable storage."""
        ...

    async def query(self, text: str, k: int = 5) -> list[SearchResult]:
        """Return up to k hits, most similar first."""
        ...
