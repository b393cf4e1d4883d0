# dirvec/core/hashing.py
"""
Content fingerprints.

A fingerprint depends on the raw bytes only: path, mtime and text encoding
never influence it.
"""

from __future__ import annotations

import hashlib


def compute_content_hash(data: bytes) -> str:
    """Return the SHA-256 hex digest of data."""
    return hashlib.sha256(data).hexdigest()

