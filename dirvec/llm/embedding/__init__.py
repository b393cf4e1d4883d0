# dirvec/llm/embedding/__init__.py
"""
Embedding plugins.

Usage:
    from dirvec.llm.embedding import get_embedding_plugin

    embedder = get_embedding_plugin("local")()
    vector = await embedder.embed("hello")
"""

from dirvec.llm.embedding.base import EmbeddingPlugin
from dirvec.llm.embedding.local import LocalEmbedder
from dirvec.llm.embedding.openai import OpenAIEmbedder
from dirvec.llm.embedding.registry import (
    EMBEDDING_REGISTRY,
    PluginNotFoundError,
    available_embedding_plugins,
    create_embedder,
    get_embedding_plugin,
)

__all__ = [
    "EmbeddingPlugin",
    "LocalEmbedder",
    "OpenAIEmbedder",
    "EMBEDDING_REGISTRY",
    "PluginNotFoundError",
    "available_embedding_plugins",
    "create_embedder",
    "get_embedding_plugin",
]
