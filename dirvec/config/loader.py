# dirvec/config/loader.py
"""
Configuration loader for dirvec.

Responsibilities:
- Find and load the YAML config file (optional)
- Expand ${ENV_VAR} placeholders
- Overlay CLI options
- Validate via schema
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from dirvec.config.schema import DirvecConfig
from dirvec.exceptions import ConfigError
from dirvec.logging.logger import get_logger
from dirvec.logging.tags import CONFIG

logger = get_logger(__name__)

DEFAULT_CONFIG_FILENAME = "dirvec.yaml"


@dataclass(frozen=True)
class CliOverrides:
    """
    Options taken from the command line. None means "not given".

    Every field here wins over the config file.
    """

    force_rebuild: Optional[bool] = None
    api_key: Optional[str] = None
    index_path: Optional[Path] = None
    metadata_path: Optional[Path] = None

    def as_config_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.force_rebuild is not None:
            data["force_rebuild"] = self.force_rebuild
        if self.api_key is not None:
            data.setdefault("embedding", {})["api_key"] = self.api_key
        if self.index_path is not None:
            data.setdefault("storage", {})["index_path"] = str(self.index_path)
        if self.metadata_path is not None:
            data.setdefault("storage", {})["metadata_path"] = str(self.metadata_path)
        return data


_ENV_VAR_RE = re.compile(r"\$(?:\{(\w+)\}|(\w+))")


def _expand_string(value: str) -> Optional[str]:
    """
    Expand $VAR and ${VAR} placeholders.

    A value that is nothing but an unset placeholder becomes None, so an unset
    ${OPENAI_API_KEY} reads as a missing key. Unset placeholders inside longer
    text expand to the empty string.
    """
    match = _ENV_VAR_RE.fullmatch(value)
    if match and (match.group(1) or match.group(2)) not in os.environ:
        return None
    return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1) or m.group(2), ""), value)


def _expand_env(value: Any) -> Any:
    if isinstance(value, str):
        return _expand_string(value)
    if isinstance(value, dict):
        return {k: _expand_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env(v) for v in value]
    return value


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge `override` into `base`.
    Returns a new dict; does not mutate inputs.
    """
    merged: Dict[str, Any] = dict(base)

    for key, override_val in override.items():
        base_val = merged.get(key)
        if isinstance(base_val, dict) and isinstance(override_val, dict):
            merged[key] = _deep_merge(base_val, override_val)
        else:
            merged[key] = override_val

    return merged


def find_config_file(root: Path, explicit_path: Optional[Path] = None) -> Optional[Path]:
    """
    Resolve the config file path.

    Priority:
      1. explicit path (must exist)
      2. <root>/dirvec.yaml if present
      3. None
    """
    if explicit_path is not None:
        path = explicit_path if explicit_path.is_absolute() else root / explicit_path
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        return path

    candidate = root / DEFAULT_CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def load_config_file(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a YAML mapping at the top level: {path}")

    return _expand_env(data)


def build_config(
    file_config: Optional[Dict[str, Any]] = None,
    overrides: Optional[CliOverrides] = None,
) -> DirvecConfig:
    """Overlay CLI options onto file values and validate once."""
    merged = _deep_merge(file_config or {}, (overrides or CliOverrides()).as_config_dict())

    try:
        return DirvecConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration:\n{e}") from e


def load_config(
    root: Path,
    config_path: Optional[Path] = None,
    overrides: Optional[CliOverrides] = None,
) -> DirvecConfig:
    """Find, load and merge configuration for a working directory."""
    path = find_config_file(root, config_path)
    file_config: Dict[str, Any] = {}
    if path is not None:
        logger.debug(f"{CONFIG} Loading config from {path}")
        file_config = load_config_file(path)

    return build_config(file_config, overrides)


__all__ = [
    "DEFAULT_CONFIG_FILENAME",
    "CliOverrides",
    "build_config",
    "find_config_file",
    "load_config",
    "load_config_file",
]
