# dirvec/sync/scanner.py
"""
File discovery for a single working directory.

Only regular files directly inside the directory are listed; subdirectories
are not descended into. Names are filtered with fnmatch-style include and
ignore patterns. Paths in `exclude` (the ledger and index locations) are
always skipped so dirvec never indexes its own state.
"""

from __future__ import annotations

import fnmatch
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Sequence, Set, Tuple

from dirvec.logging.logger import get_logger
from dirvec.logging.tags import SYNC

logger = get_logger(__name__)

DEFAULT_INCLUDE: Tuple[str, ...] = ("*",)


@dataclass
class ScanResult:
    """Files found by a scan plus any entries that could not be inspected."""

    root: str
    files: List[Path] = field(default_factory=list)
    errors: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def total_scanned(self) -> int:
        return len(self.files)


class FileScanner:
    """
    Lists candidate files in a directory.

    Usage:
        scanner = FileScanner(include=["*.md", "*.txt"], ignore=["draft_*"])
        result = scanner.scan("/path/to/project")
    """

    def __init__(
        self,
        include: Sequence[str] | None = None,
        ignore: Sequence[str] | None = None,
        exclude: Iterable[str | Path] | None = None,
    ) -> None:
        self._include = tuple(include) if include else DEFAULT_INCLUDE
        self._ignore = tuple(ignore or ())
        self._exclude: Set[str] = {str(Path(p).resolve()) for p in (exclude or ())}

    def _matches(self, name: str) -> bool:
        if not any(fnmatch.fnmatch(name, pattern) for pattern in self._include):
            return False
        return not any(fnmatch.fnmatch(name, pattern) for pattern in self._ignore)

    def scan(self, directory: str | Path) -> ScanResult:
        """Return the matching files of directory, sorted by name."""
        root = Path(directory).resolve()
        result = ScanResult(root=str(root))

        with os.scandir(root) as entries:
            for entry in sorted(entries, key=lambda e: e.name):
                try:
                    if not entry.is_file():
                        continue
                except OSError as e:
                    result.errors.append((entry.path, str(e)))
                    continue

                path = root / entry.name
                if str(path) in self._exclude:
                    continue
                if not self._matches(entry.name):
                    continue
                result.files.append(path)

        logger.debug(f"{SYNC} Scanned {root}: {result.total_scanned} files")
        return result


__all__ = [
    "DEFAULT_INCLUDE",
    "FileScanner",
    "ScanResult",
]
