# dirvec/cli/ui/display.py
"""
Rendering of search results and sync summaries.
"""

from __future__ import annotations

from typing import Sequence

from dirvec.sync.executor import SyncSummary
from dirvec.vector_db.base import SearchResult

from .console import SEARCH
from .output import OutputMixin

SNIPPET_LENGTH = 200

_out = OutputMixin()


def format_snippet(content: str, length: int = SNIPPET_LENGTH) -> str:
    return f"{content[:length]}..."


def display_summary(summary: SyncSummary, verbose: bool = False) -> None:
    if summary.errors:
        _out.warning(f"Synced with errors: {summary}")
        for detail in summary.error_details:
            _out.warning(detail)
    else:
        _out.success(f"Index up to date: {summary}")

    if verbose:
        _out.info(f"Sync took {summary.duration_seconds:.2f}s")


def display_results(results: Sequence[SearchResult], show_scores: bool = False) -> None:
    """Print results 1-indexed with the source path and a bounded snippet."""
    _out.section(f"{SEARCH} Vector Search Results:")

    if not results:
        _out.info("No results.")
        return

    for i, result in enumerate(results, 1):
        score = f" (score {result.score:.3f})" if show_scores else ""
        _out.print(f"\n{i}. File: {result.source}{score}")
        _out.print(f"   Snippet: {format_snippet(result.content)}")
