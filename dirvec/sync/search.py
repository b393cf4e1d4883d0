# dirvec/sync/search.py
"""
End-to-end search run.

Sequence:
1. Validate config (credential, index destination). No side effects yet.
2. Create embedder, open index and ledger (fresh ones on force rebuild).
3. Sync every file of the working directory.
4. Persist index, then ledger.
5. Query the persisted state.
6. Close the embedder if it was created here.

The query never runs against a partially synced index: it only happens after
step 4 succeeded.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dirvec.config.schema import DirvecConfig
from dirvec.config.validation import validate_config
from dirvec.llm.embedding.base import EmbeddingPlugin
from dirvec.llm.embedding.registry import create_embedder
from dirvec.logging.logger import get_logger
from dirvec.logging.tags import EMBEDDING, SYNC
from dirvec.sync.executor import ProgressCallback, SyncOrchestrator, SyncSummary
from dirvec.sync.ledger import Ledger, load_ledger, save_ledger
from dirvec.sync.scanner import FileScanner
from dirvec.vector_db.base import SearchResult
from dirvec.vector_db.faiss_index import FaissVectorIndex

logger = get_logger(__name__)


@dataclass
class SearchOutcome:
    summary: SyncSummary
    results: List[SearchResult] = field(default_factory=list)


async def run_search(
    query: str,
    config: DirvecConfig,
    directory: str | Path | None = None,
    *,
    embedder: Optional[EmbeddingPlugin] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> SearchOutcome:
    """
    Sync the working directory into its index and search it.

    Args:
        query: Natural-language search text.
        config: Resolved configuration.
        directory: Working directory; defaults to the current directory.
        embedder: Pre-built embedder, skipping plugin creation (tests, SDK use).
        on_progress: Optional callback(current, total, file_path).

    Raises:
        ConfigError: Before any side effect, on invalid credential or index path.
        PersistError: When the index or ledger cannot be written.
        EmbeddingError / VectorIndexError: When the final query fails.
    """
    root = Path(directory or Path.cwd()).resolve()
    index_path = config.storage.resolved_index_path(root)
    metadata_path = config.storage.resolved_metadata_path(root)

    validate_config(config, root, check_credential=embedder is None)
    owns_embedder = embedder is None
    if owns_embedder:
        embedder = create_embedder(config.embedding)

    try:
        ledger: Ledger
        if config.force_rebuild:
            logger.info(f"{SYNC} Forcing vector update from scratch...")
            index = FaissVectorIndex.empty(embedder)
            ledger = {}
        else:
            index = await asyncio.to_thread(FaissVectorIndex.open, index_path, embedder)
            ledger = await asyncio.to_thread(load_ledger, metadata_path)

        scanner = FileScanner(
            include=config.scan.include,
            ignore=config.scan.ignore,
            exclude=[index_path, metadata_path],
        )
        orchestrator = SyncOrchestrator(index=index, scanner=scanner)
        summary = await orchestrator.sync(
            root, ledger, force=config.force_rebuild, on_progress=on_progress
        )

        await index.persist(index_path)
        await asyncio.to_thread(save_ledger, metadata_path, ledger)

        results = await index.query(query, k=config.top_k)
    finally:
        if owns_embedder:
            await _close_embedder(embedder)

    return SearchOutcome(summary=summary, results=results)


async def _close_embedder(embedder: EmbeddingPlugin) -> None:
    close = getattr(embedder, "close", None)
    if close is None:
        return
    try:
        await close()
    except Exception as e:
        logger.warning(f"{EMBEDDING} Failed to close embedder: {e}")


__all__ = ["SearchOutcome", "run_search"]
