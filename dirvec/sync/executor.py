# dirvec/sync/executor.py
"""
Orchestrator for incremental sync.

For every scanned file, in order:
1. Read bytes and stat (off the event loop)
2. Fingerprint and ask the planner for a decision
3. Apply the decision to the vector index (delete and/or insert)
4. Update the ledger aggregate

Files are processed one at a time; the index is mutated in place and is NOT
persisted here. The caller persists once after sync() returns.

Error policy:
- Any failure for one file is logged and counted, the ledger is left as it
  was for that path, and the run continues.
- Exception: if a MODIFIED file's old vector was already deleted when the
  insert failed, its ledger entry is dropped so the next run treats it as NEW.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional

from dirvec.core.hashing import compute_content_hash
from dirvec.logging.logger import get_logger
from dirvec.logging.tags import SYNC
from dirvec.sync.ledger import FileRecord, Ledger
from dirvec.sync.planner import SyncDecision, SyncPlanner
from dirvec.sync.scanner import FileScanner
from dirvec.vector_db.base import VectorDocument, VectorIndex

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int, str], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SyncSummary:
    """Summary of a sync run."""

    scanned: int = 0
    inserted: int = 0
    replaced: int = 0
    skipped: int = 0
    errors: int = 0
    error_details: List[str] = field(default_factory=list)
    started_at: datetime = field(default_factory=_utcnow)
    finished_at: Optional[datetime] = None

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def record_error(self, message: str) -> None:
        self.errors += 1
        self.error_details.append(message)

    def __str__(self) -> str:
        return (
            f"scanned {self.scanned}, inserted {self.inserted}, "
            f"replaced {self.replaced}, skipped {self.skipped}, "
            f"errors {self.errors}"
        )


class SyncOrchestrator:
    """
    Brings a vector index into agreement with the files of one directory.

    The ledger is an explicit aggregate: it is passed into sync_file() and
    returned updated, never held in module state.

    Usage:
        orchestrator = SyncOrchestrator(index=index, scanner=FileScanner())
        summary = await orchestrator.sync("/work", ledger)
        await index.persist(index_path)
        save_ledger(metadata_path, ledger)
    """

    def __init__(
        self,
        *,
        index: VectorIndex,
        scanner: Optional[FileScanner] = None,
        planner: Optional[SyncPlanner] = None,
    ) -> None:
        self._index = index
        self._scanner = scanner or FileScanner()
        self._planner = planner or SyncPlanner()
        self._summary: Optional[SyncSummary] = None

    async def sync(
        self,
        directory: str | Path,
        ledger: Ledger,
        force: bool = False,
        on_progress: Optional[ProgressCallback] = None,
    ) -> SyncSummary:
        """
        Sync every file of directory into the index.

        Args:
            directory: Working directory (not descended into).
            ledger: Ledger aggregate; updated in place.
            force: Treat every ledger entry as stale. Callers doing a full
                rebuild clear the ledger and start from an empty index first.
            on_progress: Optional callback(current, total, file_path).

        Returns:
            SyncSummary with counters.
        """
        summary = SyncSummary()
        self._summary = summary

        scan_result = await asyncio.to_thread(self._scanner.scan, directory)
        summary.scanned = scan_result.total_scanned
        for path, error in scan_result.errors:
            summary.record_error(f"Scan error: {path}: {error}")
            logger.warning(f"{SYNC} Could not inspect {path}: {error}")

        total = len(scan_result.files)
        logger.info(f"{SYNC} Syncing {total} files from {scan_result.root}")

        for i, path in enumerate(scan_result.files):
            if on_progress:
                on_progress(i, total, str(path))
            ledger = await self.sync_file(path, ledger, force=force)

        if on_progress and total > 0:
            on_progress(total, total, "Done")

        summary.finished_at = _utcnow()
        self._summary = None

        logger.info(f"{SYNC} Sync complete: {summary}")
        return summary

    async def sync_file(self, path: Path, ledger: Ledger, force: bool = False) -> Ledger:
        """
        Sync a single file and return the updated ledger.

        Never raises for per-file problems.
        """
        summary = self._summary or SyncSummary()
        key = str(path)
        deleted = False

        try:
            data = await asyncio.to_thread(path.read_bytes)
            stat = await asyncio.to_thread(path.stat)

            content_hash = compute_content_hash(data)
            decision = self._planner.decide(key, content_hash, ledger, force=force)
            action = self._planner.plan_action(decision)

            if action.is_noop:
                summary.skipped += 1
                logger.debug(f"{SYNC} Unchanged: {key}")
                return ledger

            content = data.decode("utf-8")

            if action.delete:
                await self._index.delete(key)
                deleted = True

            await self._index.insert(VectorDocument(id=key, content=content, metadata={"source": key}))

            ledger[key] = FileRecord(hash=content_hash, timestamp=stat.st_mtime * 1000)

            if decision is SyncDecision.MODIFIED:
                summary.replaced += 1
            else:
                summary.inserted += 1
            logger.debug(f"{SYNC} {decision.value.capitalize()}: {key}")

        except Exception as e:
            if deleted:
                ledger.pop(key, None)
            summary.record_error(f"Sync error: {key}: {e}")
            logger.warning(f"{SYNC} Error processing file {key}: {e}")

        return ledger


__all__ = [
    "ProgressCallback",
    "SyncOrchestrator",
    "SyncSummary",
]
