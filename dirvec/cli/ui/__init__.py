# dirvec/cli/ui/__init__.py
"""
CLI UI components.

Usage:
    from dirvec.cli.ui import ui

    ui.header("dirvec search")
    ui.success("Done!")
"""

from __future__ import annotations

from .console import console
from .display import display_results, display_summary, format_snippet
from .output import OutputMixin
from .progress import ProgressMixin, SyncProgress


class UI(OutputMixin, ProgressMixin):
    """Unified UI helpers."""

    pass


# Singleton instance
ui = UI()

__all__ = [
    "SyncProgress",
    "UI",
    "ui",
    "console",
    "display_results",
    "display_summary",
    "format_snippet",
]
