# dirvec/cli/commands/config.py
"""
Config command - show the resolved configuration.

Usage:
    dirvec config
    dirvec config --config other.yaml
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import yaml

from dirvec.cli.ui import ui
from dirvec.config import find_config_file, load_config
from dirvec.exceptions import ConfigError


def _mask(secret: Optional[str]) -> Optional[str]:
    if not secret:
        return secret
    return f"{secret[:3]}...{secret[-4:]}" if len(secret) > 8 else "***"


def command(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (defaults to ./dirvec.yaml if present).",
    ),
) -> None:
    """
    Show the resolved configuration (API key masked).
    """
    root = Path.cwd()

    try:
        source = find_config_file(root, config_path)
        config = load_config(root, config_path)
    except ConfigError as e:
        ui.error(str(e))
        raise typer.Exit(1)

    data = config.model_dump(mode="json")
    data["embedding"]["api_key"] = _mask(data["embedding"]["api_key"])

    ui.header("dirvec config")
    ui.info(f"Source: {source if source else 'built-in defaults'}")
    ui.syntax(yaml.safe_dump(data, sort_keys=False))
