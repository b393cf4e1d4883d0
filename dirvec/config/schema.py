# dirvec/config/schema.py
"""
Pydantic schema for dirvec configuration.

Rules:
- Strict validation
- No unknown keys
- Every field has a built-in default, so an empty config file is valid
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_INDEX_PATH = Path(".dirvec") / "vector.faiss"
DEFAULT_METADATA_PATH = Path(".dirvec") / "metadata.json"
DEFAULT_TOP_K = 5


class EmbeddingConfig(BaseModel):
    plugin_name: Literal["openai", "local"] = Field(
        default="openai", description="Embedding plugin name"
    )
    model: Optional[str] = Field(default=None, description="Model identifier")
    api_key: Optional[str] = Field(
        default=None,
        description="Explicit API key (falls back to OPENAI_API_KEY)",
        repr=False,
    )
    dimensions: Optional[int] = Field(default=None, gt=0)
    kwargs: dict[str, Any] = Field(
        default_factory=dict, description="Extra init kwargs for plugins without credentials"
    )

    model_config = ConfigDict(extra="forbid")


class ScanConfig(BaseModel):
    include: List[str] = Field(default_factory=lambda: ["*"], description="fnmatch patterns to index")
    ignore: List[str] = Field(default_factory=list, description="fnmatch patterns to skip")

    model_config = ConfigDict(extra="forbid")


class StorageConfig(BaseModel):
    """
    Where dirvec keeps its state.

    index_path_explicit is set when the user chose the index location, which
    turns on the writability preflight check.
    """

    index_path: Optional[Path] = None
    metadata_path: Optional[Path] = None

    model_config = ConfigDict(extra="forbid")

    @property
    def index_path_explicit(self) -> bool:
        return self.index_path is not None

    def resolved_index_path(self, root: Path) -> Path:
        return (root / (self.index_path or DEFAULT_INDEX_PATH)).resolve()

    def resolved_metadata_path(self, root: Path) -> Path:
        return (root / (self.metadata_path or DEFAULT_METADATA_PATH)).resolve()


class LoggingConfig(BaseModel):
    level: str = Field(default="WARNING")

    model_config = ConfigDict(extra="forbid")

    @field_validator("level")
    @classmethod
    def _upper(cls, v: str) -> str:
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return v


class DirvecConfig(BaseModel):
    embedding: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    top_k: int = Field(default=DEFAULT_TOP_K, gt=0)
    force_rebuild: bool = False

    model_config = ConfigDict(extra="forbid")
