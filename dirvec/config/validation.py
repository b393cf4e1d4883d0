# dirvec/config/validation.py
"""
Startup checks run before any index or embedding work.

Both checks are pure: they never create, open or modify files.
"""

from __future__ import annotations

import os
from pathlib import Path

from dirvec.config.schema import DirvecConfig
from dirvec.exceptions import DestinationNotWritableError
from dirvec.llm.credentials import requires_api_key, resolve_api_key, validate_api_key


def ensure_destination_writable(index_path: Path) -> None:
    """
    Check that the parent directory of index_path exists and is writable.

    Raises:
        DestinationNotWritableError: If it is missing, not a directory, or
            not writable by the current user.
    """
    parent = Path(index_path).parent

    if not parent.exists():
        raise DestinationNotWritableError(index_path, f"directory {parent} does not exist")
    if not parent.is_dir():
        raise DestinationNotWritableError(index_path, f"{parent} is not a directory")
    if not os.access(parent, os.W_OK | os.X_OK):
        raise DestinationNotWritableError(index_path, f"directory {parent} is not writable")


def validate_config(config: DirvecConfig, root: Path, check_credential: bool = True) -> None:
    """
    Validate a resolved config for a run in root.

    check_credential is False when the caller supplies its own embedder.

    Raises:
        CredentialError: Missing or malformed API key.
        DestinationNotWritableError: Explicit index path cannot be written.
    """
    provider = config.embedding.plugin_name
    if check_credential and requires_api_key(provider):
        validate_api_key(provider, resolve_api_key(provider, config.embedding.api_key))

    if config.storage.index_path_explicit:
        ensure_destination_writable(config.storage.resolved_index_path(root))


__all__ = ["ensure_destination_writable", "validate_config"]
