# dirvec/sync/planner.py
"""
Per-file sync decisions.

Compares a file's current fingerprint with the ledger:

    in ledger?  same hash?  force?   decision
    no          -           -        NEW
    yes         yes         no       UNCHANGED
    yes         no          -        MODIFIED
    yes         -           yes      MODIFIED

This module ONLY decides; the orchestrator executes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from dirvec.sync.ledger import FileRecord


class SyncDecision(str, Enum):
    UNCHANGED = "unchanged"
    NEW = "new"
    MODIFIED = "modified"


@dataclass(frozen=True)
class SyncAction:
    """Vector index operations implied by a decision."""

    delete: bool
    insert: bool

    @property
    def is_noop(self) -> bool:
        return not (self.delete or self.insert)


_ACTIONS = {
    SyncDecision.UNCHANGED: SyncAction(delete=False, insert=False),
    SyncDecision.NEW: SyncAction(delete=False, insert=True),
    SyncDecision.MODIFIED: SyncAction(delete=True, insert=True),
}


class SyncPlanner:
    """
    Classifies files as UNCHANGED, NEW or MODIFIED.

    Usage:
        planner = SyncPlanner()
        decision = planner.decide(path, current_hash, ledger)
        action = planner.plan_action(decision)
    """

    def decide(
        self,
        path: str,
        current_hash: str,
        ledger: Mapping[str, FileRecord],
        force: bool = False,
    ) -> SyncDecision:
        record = ledger.get(path)
        if record is None:
            return SyncDecision.NEW
        if force or record.hash != current_hash:
            return SyncDecision.MODIFIED
        return SyncDecision.UNCHANGED

    @staticmethod
    def plan_action(decision: SyncDecision) -> SyncAction:
        return _ACTIONS[decision]


__all__ = [
    "SyncAction",
    "SyncDecision",
    "SyncPlanner",
]
