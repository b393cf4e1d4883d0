# tests/conftest.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Set, Tuple

import pytest

from dirvec.exceptions import EmbeddingError
from dirvec.logging import logger as dirvec_logger
from dirvec.vector_db.base import SearchResult, VectorDocument


class RecordingIndex:
    """In-memory VectorIndex that records every operation in order."""

    def __init__(self) -> None:
        self.documents: dict[str, VectorDocument] = {}
        self.operations: List[Tuple[str, str]] = []
        self.persisted_to: List[Path] = []
        self._fail_insert: Set[str] = set()

    def fail_insert_on(self, doc_id: str) -> None:
        self._fail_insert.add(doc_id)

    def clear_failures(self) -> None:
        self._fail_insert.clear()

    async def insert(self, document: VectorDocument) -> None:
        if document.id in self._fail_insert:
            raise EmbeddingError(f"embedding failed for {document.id}")
        self.operations.append(("insert", document.id))
        self.documents[document.id] = document

    async def delete(self, doc_id: str) -> bool:
        self.operations.append(("delete", doc_id))
        return self.documents.pop(doc_id, None) is not None

    async def persist(self, storage_path) -> None:
        self.persisted_to.append(Path(storage_path))

    async def query(self, text: str, k: int = 5) -> list[SearchResult]:
        return []

    def ops_for(self, doc_id: str) -> List[str]:
        return [op for op, target in self.operations if target == doc_id]

    def reset_operations(self) -> None:
        self.operations.clear()


@pytest.fixture
def recording_index() -> RecordingIndex:
    return RecordingIndex()


@pytest.fixture(autouse=True)
def _reset_dirvec_logging():
    """Drop the CLI stderr handler between tests so it never outlives its stream."""
    yield
    root = logging.getLogger(dirvec_logger.ROOT_LOGGER_NAME)
    if dirvec_logger._handler is not None:
        root.removeHandler(dirvec_logger._handler)
        dirvec_logger._handler = None
    root.setLevel(logging.NOTSET)
