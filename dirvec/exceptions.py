# dirvec/exceptions.py
"""
Error taxonomy for dirvec.

- ConfigError and subclasses are raised before any side effect.
- EmbeddingError / VectorIndexError are per-file errors during a sync.
- PersistError is fatal for the run.
"""

from __future__ import annotations


class DirvecError(Exception):
    """Base class for all dirvec errors."""


class ConfigError(DirvecError):
    """Invalid or missing configuration."""


class CredentialError(ConfigError):
    """Embedding API credential is missing or malformed."""


class DestinationNotWritableError(ConfigError):
    """The directory that should hold the vector index cannot be written."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write vector index to {path}: {reason}")


class EmbeddingError(DirvecError):
    """Embedding API call failed."""


class VectorIndexError(DirvecError):
    """Vector index rejected an operation."""


class PersistError(DirvecError):
    """Ledger or vector index could not be written to disk."""


__all__ = [
    "DirvecError",
    "ConfigError",
    "CredentialError",
    "DestinationNotWritableError",
    "EmbeddingError",
    "VectorIndexError",
    "PersistError",
]
