# dirvec/llm/embedding/base.py
from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class EmbeddingPlugin(Protocol):
    """
    Canonical embedding plugin contract.

    Provider-specific logic must live in plugin implementations only.
    Calls are awaited one at a time; plugins must not retry on their own
    beyond what their client library does.
    """

    plugin_name: str

    async def embed(self, text: str) -> list[float]:
        ...
