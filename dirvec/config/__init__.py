# dirvec/config/__init__.py
"""
Configuration for dirvec.

Precedence (highest first):
1. CLI options
2. Config file (dirvec.yaml in the working directory, or --config)
3. Environment (OPENAI_API_KEY, credential only)
4. Built-in defaults
"""

from dirvec.config.loader import (
    DEFAULT_CONFIG_FILENAME,
    CliOverrides,
    build_config,
    find_config_file,
    load_config,
    load_config_file,
)
from dirvec.config.schema import (
    DEFAULT_INDEX_PATH,
    DEFAULT_METADATA_PATH,
    DEFAULT_TOP_K,
    DirvecConfig,
    EmbeddingConfig,
    LoggingConfig,
    ScanConfig,
    StorageConfig,
)
from dirvec.config.validation import ensure_destination_writable, validate_config

__all__ = [
    "DEFAULT_CONFIG_FILENAME",
    "DEFAULT_INDEX_PATH",
    "DEFAULT_METADATA_PATH",
    "DEFAULT_TOP_K",
    "CliOverrides",
    "DirvecConfig",
    "EmbeddingConfig",
    "LoggingConfig",
    "ScanConfig",
    "StorageConfig",
    "build_config",
    "ensure_destination_writable",
    "find_config_file",
    "load_config",
    "load_config_file",
    "validate_config",
]
