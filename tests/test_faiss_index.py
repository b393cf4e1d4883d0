# tests/test_faiss_index.py
"""
Tests for dirvec.vector_db.faiss_index.
"""

import json

import pytest

from dirvec.exceptions import EmbeddingError, PersistError, VectorIndexError
from dirvec.llm.embedding.local import LocalEmbedder
from dirvec.vector_db.base import VectorDocument
from dirvec.vector_db.faiss_index import DOCSTORE_FILENAME, INDEX_FILENAME, FaissVectorIndex


class FixedEmbedder:
    """Returns a fixed vector per known text."""

    plugin_name = "fixed"

    def __init__(self, vectors: dict):
        self._vectors = vectors

    async def embed(self, text: str) -> list[float]:
        if text not in self._vectors:
            raise EmbeddingError(f"no vector for {text!r}")
        return self._vectors[text]


@pytest.fixture
def embedder() -> LocalEmbedder:
    return LocalEmbedder(dim=64)


class TestInsertAndQuery:
    @pytest.mark.asyncio
    async def test_empty_index_returns_nothing(self, embedder):
        index = FaissVectorIndex.empty(embedder)

        assert await index.query("hello") == []

    @pytest.mark.asyncio
    async def test_query_ranks_by_similarity(self, embedder):
        index = FaissVectorIndex.empty(embedder)
        await index.insert(VectorDocument(id="a.txt", content="hello world"))
        await index.insert(VectorDocument(id="b.txt", content="goodbye"))

        results = await index.query("hello", k=5)

        assert 0 < len(results) <= 5
        assert [r.score for r in results] == sorted((r.score for r in results), reverse=True)
        ids = [r.id for r in results]
        assert ids.index("a.txt") <= ids.index("b.txt")

    @pytest.mark.asyncio
    async def test_query_limits_to_k(self, embedder):
        index = FaissVectorIndex.empty(embedder)
        for i in range(8):
            await index.insert(VectorDocument(id=f"{i}.txt", content=f"doc number {i}"))

        assert len(await index.query("doc", k=5)) == 5
        assert len(await index.query("doc", k=20)) == 8

    @pytest.mark.asyncio
    async def test_payload_has_content_and_source(self, embedder):
        index = FaissVectorIndex.empty(embedder)
        await index.insert(VectorDocument(id="/w/a.txt", content="hello", metadata={"source": "/w/a.txt"}))

        [hit] = await index.query("hello")

        assert hit.content == "hello"
        assert hit.source == "/w/a.txt"

    @pytest.mark.asyncio
    async def test_reinsert_replaces_vector(self, embedder):
        index = FaissVectorIndex.empty(embedder)
        await index.insert(VectorDocument(id="a.txt", content="first"))
        await index.insert(VectorDocument(id="a.txt", content="second"))

        assert len(index) == 1
        assert index.get_document("a.txt").content == "second"

    @pytest.mark.asyncio
    async def test_dimension_mismatch_raises(self):
        index = FaissVectorIndex.empty(FixedEmbedder({"a": [1.0, 0.0], "b": [1.0, 0.0, 0.0]}))
        await index.insert(VectorDocument(id="a", content="a"))

        with pytest.raises(VectorIndexError):
            await index.insert(VectorDocument(id="b", content="b"))
        assert "b" not in index

    @pytest.mark.asyncio
    async def test_embedding_error_propagates(self):
        index = FaissVectorIndex.empty(FixedEmbedder({}))

        with pytest.raises(EmbeddingError):
            await index.insert(VectorDocument(id="a", content="a"))
        assert len(index) == 0


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_removes_from_results(self, embedder):
        index = FaissVectorIndex.empty(embedder)
        await index.insert(VectorDocument(id="a.txt", content="hello world"))
        await index.insert(VectorDocument(id="b.txt", content="goodbye"))

        assert await index.delete("a.txt") is True

        assert [r.id for r in await index.query("hello")] == ["b.txt"]
        assert "a.txt" not in index

    @pytest.mark.asyncio
    async def test_delete_unknown_id_is_not_fatal(self, embedder):
        index = FaissVectorIndex.empty(embedder)

        assert await index.delete("missing.txt") is False

        await index.insert(VectorDocument(id="a.txt", content="x"))
        assert await index.delete("missing.txt") is False
        assert len(index) == 1


class TestPersistence:
    @pytest.mark.asyncio
    async def test_persist_and_open_round_trip(self, tmp_path, embedder):
        store = tmp_path / "vector.faiss"
        index = FaissVectorIndex.empty(embedder)
        await index.insert(VectorDocument(id="a.txt", content="hello world"))
        await index.insert(VectorDocument(id="b.txt", content="goodbye"))
        await index.delete("b.txt")
        await index.insert(VectorDocument(id="c.txt", content="hello again"))

        await index.persist(store)
        reopened = FaissVectorIndex.open(store, embedder)

        assert len(reopened) == 2
        assert reopened.dimension == 64
        assert {r.id for r in await reopened.query("hello")} == {"a.txt", "c.txt"}

    @pytest.mark.asyncio
    async def test_reopened_index_keeps_fresh_ids(self, tmp_path, embedder):
        store = tmp_path / "vector.faiss"
        index = FaissVectorIndex.empty(embedder)
        await index.insert(VectorDocument(id="a.txt", content="alpha"))
        await index.persist(store)

        reopened = FaissVectorIndex.open(store, embedder)
        await reopened.insert(VectorDocument(id="b.txt", content="beta"))
        await reopened.delete("a.txt")

        assert [r.id for r in await reopened.query("beta")] == ["b.txt"]

    @pytest.mark.asyncio
    async def test_persist_empty_index(self, tmp_path, embedder):
        store = tmp_path / "vector.faiss"

        await FaissVectorIndex.empty(embedder).persist(store)

        assert (store / DOCSTORE_FILENAME).is_file()
        assert not (store / INDEX_FILENAME).exists()
        assert len(FaissVectorIndex.open(store, embedder)) == 0

    @pytest.mark.asyncio
    async def test_persist_failure_raises(self, tmp_path, embedder):
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory")

        with pytest.raises(PersistError):
            await FaissVectorIndex.empty(embedder).persist(blocker / "store")


class TestOpenFallback:
    def test_missing_storage_gives_empty_index(self, tmp_path, embedder):
        index = FaissVectorIndex.open(tmp_path / "nothing-here", embedder)

        assert len(index) == 0

    def test_corrupted_docstore_gives_empty_index(self, tmp_path, embedder):
        store = tmp_path / "vector.faiss"
        store.mkdir()
        (store / DOCSTORE_FILENAME).write_text("{not json")

        assert len(FaissVectorIndex.open(store, embedder)) == 0

    def test_corrupted_index_file_gives_empty_index(self, tmp_path, embedder):
        store = tmp_path / "vector.faiss"
        store.mkdir()
        (store / DOCSTORE_FILENAME).write_text(
            json.dumps({"version": 1, "dimension": 64, "next_id": 1,
                        "documents": {"a.txt": {"int_id": 0, "content": "a", "metadata": {}}}})
        )
        (store / INDEX_FILENAME).write_bytes(b"garbage")

        assert len(FaissVectorIndex.open(store, embedder)) == 0

    def test_inconsistent_counts_give_empty_index(self, tmp_path, embedder):
        store = tmp_path / "vector.faiss"
        store.mkdir()
        (store / DOCSTORE_FILENAME).write_text(
            json.dumps({"version": 1, "dimension": None, "next_id": 1,
                        "documents": {"a.txt": {"int_id": 0, "content": "a", "metadata": {}}}})
        )

        assert len(FaissVectorIndex.open(store, embedder)) == 0
