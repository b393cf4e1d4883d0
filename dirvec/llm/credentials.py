# dirvec/llm/credentials.py
"""
Credential resolution and validation for embedding providers.

Resolution order:
1. Explicit api_key in the resolved config (CLI option or config file)
2. Provider environment variable (e.g. OPENAI_API_KEY)
"""

from __future__ import annotations

import os
from typing import Optional

from dirvec.exceptions import CredentialError

MIN_API_KEY_LENGTH = 21

PROVIDER_ENV_VARS = {
    "openai": "OPENAI_API_KEY",
}


def requires_api_key(provider: str) -> bool:
    return provider in PROVIDER_ENV_VARS


def resolve_api_key(provider: str, api_key: Optional[str] = None) -> Optional[str]:
    """Return the explicit key if given, else the provider's env var, else None."""
    if api_key is not None:
        return api_key
    env_var = PROVIDER_ENV_VARS.get(provider)
    if env_var is None:
        return None
    return os.getenv(env_var)


def validate_api_key(provider: str, api_key: Optional[str]) -> str:
    """
    Check that a candidate credential is usable.

    Raises:
        CredentialError: If the key is missing, blank, or shorter than
            MIN_API_KEY_LENGTH after trimming.
    """
    env_var = PROVIDER_ENV_VARS.get(provider, "the API key")
    key = (api_key or "").strip()

    if not key:
        raise CredentialError(
            f"{provider} API key is required. Pass --api-key or set {env_var}."
        )
    if len(key) < MIN_API_KEY_LENGTH:
        raise CredentialError(
            f"{provider} API key looks invalid (expected at least "
            f"{MIN_API_KEY_LENGTH} characters, got {len(key)})."
        )
    return key


__all__ = [
    "MIN_API_KEY_LENGTH",
    "PROVIDER_ENV_VARS",
    "requires_api_key",
    "resolve_api_key",
    "validate_api_key",
]
