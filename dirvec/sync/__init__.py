# dirvec/sync/__init__.py
"""
Incremental sync between a directory, the metadata ledger and the vector index.

Key components:
- FileScanner: lists candidate files
- SyncPlanner: decides UNCHANGED / NEW / MODIFIED per file
- SyncOrchestrator: applies decisions and maintains the ledger
- run_search: validate, sync, persist, then query
"""

from dirvec.sync.executor import SyncOrchestrator, SyncSummary
from dirvec.sync.ledger import FileRecord, Ledger, load_ledger, save_ledger
from dirvec.sync.planner import SyncAction, SyncDecision, SyncPlanner
from dirvec.sync.scanner import FileScanner, ScanResult
from dirvec.sync.search import SearchOutcome, run_search

__all__ = [
    # Ledger
    "FileRecord",
    "Ledger",
    "load_ledger",
    "save_ledger",
    # Scanner
    "FileScanner",
    "ScanResult",
    # Planner
    "SyncAction",
    "SyncDecision",
    "SyncPlanner",
    # Orchestrator
    "SyncOrchestrator",
    "SyncSummary",
    # Search
    "SearchOutcome",
    "run_search",
]
