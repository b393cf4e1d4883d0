# dirvec/cli/ui/progress.py
"""
Progress display for a sync run.

The file count is only known once the scan finished, so the bar is created
on the first callback rather than up front.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

from .console import console


class SyncProgress:
    """
    Rich progress bar usable as a sync on_progress callback.

    Usage:
        with ui.sync_progress() as on_progress:
            await run_search(query, config, root, on_progress=on_progress)
    """

    def __init__(self, description: str = "Syncing"):
        self.description = description
        self.progress: Optional[Progress] = None
        self.task: Optional[TaskID] = None

    def __enter__(self):
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=console,
            transient=True,
        )
        self.progress.__enter__()
        return self

    def __call__(self, current: int, total: int, file_path: str) -> None:
        if self.task is None:
            self.task = self.progress.add_task(self.description, total=total)
        name = Path(file_path).name
        self.progress.update(
            self.task,
            completed=current,
            total=total,
            description=f"{self.description} {name}",
        )

    def __exit__(self, *args):
        self.progress.__exit__(*args)


class ProgressMixin:
    """Mixin providing progress methods for the UI class."""

    def sync_progress(self, description: str = "Syncing") -> SyncProgress:
        return SyncProgress(description)
