# dirvec/llm/embedding/local.py
"""
Deterministic local embedding fallback.

Feature-hashing over lowercase word tokens: each token lands in one of `dim`
buckets with a +1/-1 sign, and the vector is L2-normalised. No network, stable
across machines, and texts sharing words get a positive cosine score. Not
semantic; meant for offline use and tests.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from hashlib import blake2b
from typing import List

_TOKEN_RE = re.compile(r"\w+", re.UNICODE)


@dataclass(frozen=True)
class LocalEmbedderConfig:
    dim: int = 384
    seed: int = 0


class LocalEmbedder:
    """Hash-embedding backend."""

    plugin_name = "local"

    def __init__(
        self, cfg: LocalEmbedderConfig | None = None, *, dim: int = 384, seed: int = 0
    ) -> None:
        self._cfg = cfg or LocalEmbedderConfig(dim=dim, seed=seed)

    @property
    def dim(self) -> int:
        return self._cfg.dim

    @property
    def model_name(self) -> str:
        return f"hash-{self._cfg.dim}"

    async def embed(self, text: str) -> list[float]:
        return _hash_embed(text or "", dim=self._cfg.dim, seed=self._cfg.seed)


def _hash_embed(text: str, *, dim: int, seed: int) -> List[float]:
    vec = [0.0] * dim
    for token in _TOKEN_RE.findall(text.lower()):
        digest = blake2b(f"{seed}\n{token}".encode("utf-8"), digest_size=8).digest()
        bucket = int.from_bytes(digest[:4], "little") % dim
        sign = 1.0 if digest[4] & 1 else -1.0
        vec[bucket] += sign

    norm = math.sqrt(sum(x * x for x in vec))
    if norm > 0:
        vec = [x / norm for x in vec]
    return vec
