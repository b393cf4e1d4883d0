# dirvec/vector_db/faiss_index.py
"""
Local FAISS vector index.

On-disk layout (storage_path is a directory):

    <storage_path>/index.faiss     faiss.IndexIDMap2 over IndexFlatIP
    <storage_path>/docstore.json   string ids, int ids and document text

Vectors are L2-normalised before insertion so inner product equals cosine
similarity. FAISS only knows int64 ids; the docstore maps each document id
(absolute file path) to its int id.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import faiss
import numpy as np

from dirvec.exceptions import PersistError, VectorIndexError
from dirvec.llm.embedding.base import EmbeddingPlugin
from dirvec.logging.logger import get_logger
from dirvec.logging.tags import VECTOR_DB
from dirvec.vector_db.base import SearchResult, VectorDocument

logger = get_logger(__name__)

INDEX_FILENAME = "index.faiss"
DOCSTORE_FILENAME = "docstore.json"
DOCSTORE_VERSION = 1


@dataclass
class _StoredDocument:
    int_id: int
    content: str
    metadata: Dict[str, Any]


def _as_query_matrix(vector: list[float]) -> np.ndarray:
    matrix = np.asarray([vector], dtype="float32")
    faiss.normalize_L2(matrix)
    return matrix


class FaissVectorIndex:
    """
    FAISS-backed implementation of the VectorIndex protocol.

    The index dimension is fixed by the first inserted vector.

    Usage:
        index = FaissVectorIndex.open(".dirvec/vector.faiss", embedder)
        await index.insert(VectorDocument(id="/work/a.txt", content="hello"))
        await index.persist(".dirvec/vector.faiss")
        hits = await index.query("hello", k=5)
    """

    def __init__(
        self,
        embedder: EmbeddingPlugin,
        *,
        index: Optional[faiss.Index] = None,
        documents: Optional[Dict[str, _StoredDocument]] = None,
        next_id: int = 0,
    ) -> None:
        self._embedder = embedder
        self._index = index
        self._documents: Dict[str, _StoredDocument] = documents or {}
        self._by_int_id: Dict[int, str] = {doc.int_id: doc_id for doc_id, doc in self._documents.items()}
        self._next_id = next_id

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def empty(cls, embedder: EmbeddingPlugin) -> "FaissVectorIndex":
        return cls(embedder)

    @classmethod
    def open(cls, storage_path: str | Path, embedder: EmbeddingPlugin) -> "FaissVectorIndex":
        """
        Load a persisted index, or construct an empty one.

        Never raises for missing, unreadable or inconsistent storage.
        """
        storage_path = Path(storage_path)
        index_file = storage_path / INDEX_FILENAME
        docstore_file = storage_path / DOCSTORE_FILENAME

        if not docstore_file.is_file():
            logger.info(f"{VECTOR_DB} Creating new vector store at {storage_path}")
            return cls.empty(embedder)

        try:
            data = json.loads(docstore_file.read_text(encoding="utf-8"))
            documents = {
                doc_id: _StoredDocument(
                    int_id=int(entry["int_id"]),
                    content=entry["content"],
                    metadata=dict(entry.get("metadata") or {}),
                )
                for doc_id, entry in data["documents"].items()
            }
            next_id = int(data["next_id"])

            index = faiss.read_index(str(index_file)) if index_file.is_file() else None
            stored = 0 if index is None else index.ntotal
            if stored != len(documents):
                raise ValueError(
                    f"index holds {stored} vectors but docstore lists {len(documents)} documents"
                )
        except Exception as e:
            logger.warning(f"{VECTOR_DB} Failed to load vector store from {storage_path}: {e}. Creating new one.")
            return cls.empty(embedder)

        logger.info(f"{VECTOR_DB} Loaded {len(documents)} vectors from {storage_path}")
        return cls(embedder, index=index, documents=documents, next_id=next_id)

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._documents

    @property
    def dimension(self) -> Optional[int]:
        return None if self._index is None else self._index.d

    def get_document(self, doc_id: str) -> Optional[VectorDocument]:
        stored = self._documents.get(doc_id)
        if stored is None:
            return None
        return VectorDocument(id=doc_id, content=stored.content, metadata=dict(stored.metadata))

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def insert(self, document: VectorDocument) -> None:
        vector = await self._embedder.embed(document.content)
        matrix = _as_query_matrix(vector)

        if self._index is None:
            self._index = faiss.IndexIDMap2(faiss.IndexFlatIP(matrix.shape[1]))
            logger.debug(f"{VECTOR_DB} Created IndexFlatIP with dimension {matrix.shape[1]}")
        elif matrix.shape[1] != self._index.d:
            raise VectorIndexError(
                f"Embedding dimension {matrix.shape[1]} does not match index dimension {self._index.d}"
            )

        if document.id in self._documents:
            self._remove(document.id)

        int_id = self._next_id
        self._next_id += 1
        self._index.add_with_ids(matrix, np.asarray([int_id], dtype="int64"))
        self._documents[document.id] = _StoredDocument(
            int_id=int_id,
            content=document.content,
            metadata={"source": document.id, **document.metadata},
        )
        self._by_int_id[int_id] = document.id
        logger.debug(f"{VECTOR_DB} Inserted {document.id}")

    async def delete(self, doc_id: str) -> bool:
        if doc_id not in self._documents:
            logger.debug(f"{VECTOR_DB} Delete of unknown id {doc_id} ignored")
            return False
        self._remove(doc_id)
        logger.debug(f"{VECTOR_DB} Deleted {doc_id}")
        return True

    def _remove(self, doc_id: str) -> None:
        stored = self._documents.pop(doc_id)
        self._by_int_id.pop(stored.int_id, None)
        self._index.remove_ids(np.asarray([stored.int_id], dtype="int64"))

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    async def persist(self, storage_path: str | Path) -> None:
        await asyncio.to_thread(self._write, Path(storage_path))

    def _write(self, storage_path: Path) -> None:
        index_file = storage_path / INDEX_FILENAME
        docstore = {
            "version": DOCSTORE_VERSION,
            "dimension": self.dimension,
            "next_id": self._next_id,
            "documents": {
                doc_id: {"int_id": doc.int_id, "content": doc.content, "metadata": doc.metadata}
                for doc_id, doc in self._documents.items()
            },
        }

        try:
            storage_path.mkdir(parents=True, exist_ok=True)
            if self._index is not None:
                faiss.write_index(self._index, str(index_file))
            elif index_file.exists():
                index_file.unlink()
            (storage_path / DOCSTORE_FILENAME).write_text(
                json.dumps(docstore, indent=2), encoding="utf-8"
            )
        except (OSError, RuntimeError) as e:
            raise PersistError(f"Failed to save vector store to {storage_path}: {e}") from e

        logger.info(f"{VECTOR_DB} Saved {len(self._documents)} vectors to {storage_path}")

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    async def query(self, text: str, k: int = 5) -> list[SearchResult]:
        if self._index is None or not self._documents or k <= 0:
            return []

        matrix = _as_query_matrix(await self._embedder.embed(text))
        if matrix.shape[1] != self._index.d:
            raise VectorIndexError(
                f"Query embedding dimension {matrix.shape[1]} does not match index dimension {self._index.d}"
            )

        limit = min(k, len(self._documents))
        scores, ids = self._index.search(matrix, limit)

        results: list[SearchResult] = []
        for score, int_id in zip(scores[0], ids[0]):
            doc_id = self._by_int_id.get(int(int_id))
            if doc_id is None:
                continue
            stored = self._documents[doc_id]
            results.append(
                SearchResult(
                    id=doc_id,
                    score=float(score),
                    payload={"content": stored.content, "source": stored.metadata.get("source", doc_id)},
                )
            )
        return results


__all__ = [
    "DOCSTORE_FILENAME",
    "INDEX_FILENAME",
    "FaissVectorIndex",
]
