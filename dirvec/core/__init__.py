"""Core primitives shared across dirvec."""

from dirvec.core.hashing import compute_content_hash

__all__ = ["compute_content_hash"]
