# dirvec/llm/embedding/registry.py
"""
Embedding plugin registry.

Design principle: NO SILENT FALLBACK
- If the config says "openai", you get openai or an error
- "local" is only used when explicitly configured
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Type

from dirvec.exceptions import ConfigError
from dirvec.llm.credentials import requires_api_key, resolve_api_key, validate_api_key
from dirvec.llm.embedding.base import EmbeddingPlugin
from dirvec.llm.embedding.local import LocalEmbedder
from dirvec.llm.embedding.openai import OpenAIEmbedder

if TYPE_CHECKING:
    from dirvec.config.schema import EmbeddingConfig

EMBEDDING_REGISTRY: Dict[str, Type] = {
    OpenAIEmbedder.plugin_name: OpenAIEmbedder,
    LocalEmbedder.plugin_name: LocalEmbedder,
}


class PluginNotFoundError(ConfigError):
    """Requested embedding plugin is not registered."""


def available_embedding_plugins() -> List[str]:
    return sorted(EMBEDDING_REGISTRY)


def get_embedding_plugin(plugin_name: str) -> Type:
    try:
        return EMBEDDING_REGISTRY[plugin_name]
    except KeyError:
        raise PluginNotFoundError(
            f"Unknown embedding plugin '{plugin_name}'. "
            f"Available: {', '.join(available_embedding_plugins())}"
        ) from None


def create_embedder(config: "EmbeddingConfig") -> EmbeddingPlugin:
    """
    Instantiate the configured embedding plugin.

    Credentials are resolved and validated here for providers that need one.
    """
    plugin_cls = get_embedding_plugin(config.plugin_name)

    if requires_api_key(config.plugin_name):
        api_key = validate_api_key(
            config.plugin_name, resolve_api_key(config.plugin_name, config.api_key)
        )
        return plugin_cls(api_key=api_key, model=config.model, dimensions=config.dimensions)

    try:
        return plugin_cls(**config.kwargs)
    except TypeError as e:
        raise ConfigError(f"Invalid kwargs for embedding plugin '{config.plugin_name}': {e}") from e


__all__ = [
    "EMBEDDING_REGISTRY",
    "PluginNotFoundError",
    "available_embedding_plugins",
    "create_embedder",
    "get_embedding_plugin",
]
