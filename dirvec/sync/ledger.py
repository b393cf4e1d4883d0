# dirvec/sync/ledger.py
"""
Metadata ledger for incremental sync.

The ledger maps an absolute file path to the fingerprint and modification
time recorded when that file was last embedded:

    {
      "/work/a.txt": {"hash": "2cf24d...", "timestamp": 1718000000000.0}
    }

A path is present iff the vector index holds a vector for it. The ledger is
never reconciled against the index.

Loading fails soft: a missing or corrupted file yields an empty ledger so a
bad state file never blocks re-indexing. Saving fails hard.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from dirvec.exceptions import PersistError
from dirvec.logging.logger import get_logger
from dirvec.logging.tags import LEDGER

logger = get_logger(__name__)


class FileRecord(BaseModel):
    """Ledger entry for one file."""

    hash: str = Field(..., description="SHA-256 hex digest of the file bytes")
    timestamp: float = Field(..., description="Modification time in ms since epoch")

    model_config = ConfigDict(extra="forbid", frozen=True)


Ledger = Dict[str, FileRecord]


def load_ledger(path: str | Path) -> Ledger:
    """
    Load the ledger from disk.

    Returns an empty ledger when the file does not exist or cannot be parsed.
    """
    path = Path(path)

    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        logger.debug(f"{LEDGER} No ledger at {path}, starting empty")
        return {}
    except OSError as e:
        logger.warning(f"{LEDGER} Could not read ledger {path}: {e}. Starting empty.")
        return {}

    try:
        data = json.loads(raw.decode("utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        ledger = {str(key): FileRecord.model_validate(value) for key, value in data.items()}
    except (ValueError, RecursionError, ValidationError) as e:
        logger.warning(f"{LEDGER} Ignoring corrupted ledger {path}: {e}")
        return {}

    logger.debug(f"{LEDGER} Loaded {len(ledger)} entries from {path}")
    return ledger


def save_ledger(path: str | Path, ledger: Ledger) -> None:
    """
    Write the ledger as pretty-printed JSON, creating parent directories.

    Raises:
        PersistError: If the file cannot be written.
    """
    path = Path(path)
    payload = {key: record.model_dump() for key, record in ledger.items()}

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    except OSError as e:
        logger.error(f"{LEDGER} Error saving ledger to {path}: {e}")
        raise PersistError(f"Failed to save ledger to {path}: {e}") from e

    logger.debug(f"{LEDGER} Saved {len(ledger)} entries to {path}")


__all__ = [
    "FileRecord",
    "Ledger",
    "load_ledger",
    "save_ledger",
]
