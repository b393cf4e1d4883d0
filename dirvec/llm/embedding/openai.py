# dirvec/llm/embedding/openai.py
"""OpenAI embedding plugin backed by AsyncOpenAI."""

from __future__ import annotations

from typing import Any, Optional

from openai import AsyncOpenAI

from dirvec.exceptions import EmbeddingError
from dirvec.logging.logger import get_logger
from dirvec.logging.tags import EMBEDDING

logger = get_logger(__name__)

DEFAULT_MODEL = "text-embedding-3-small"


class OpenAIEmbedder:
    """
    Async embedding plugin for the OpenAI Embeddings API.

    The client does its own bounded retries (max_retries); dirvec does not
    retry on top of that. Any failure surfaces as EmbeddingError.
    """

    plugin_name = "openai"

    def __init__(
        self,
        *,
        api_key: str,
        model: Optional[str] = None,
        dimensions: Optional[int] = None,
        max_retries: int = 2,
        timeout: float = 60.0,
    ) -> None:
        self._model = model or DEFAULT_MODEL
        self._dimensions = dimensions
        self._client = AsyncOpenAI(api_key=api_key, max_retries=max_retries, timeout=timeout)
        logger.debug(f"{EMBEDDING} OpenAI embedder ready (model={self._model})")

    @property
    def model_name(self) -> str:
        return self._model

    async def embed(self, text: str) -> list[float]:
        kwargs: dict[str, Any] = {"input": [text], "model": self._model}
        if self._dimensions is not None:
            kwargs["dimensions"] = self._dimensions

        try:
            response = await self._client.embeddings.create(**kwargs)
        except Exception as e:
            raise EmbeddingError(f"OpenAI embedding request failed: {e}") from e

        return list(response.data[0].embedding)

    async def close(self) -> None:
        await self._client.close()
