# dirvec/cli/commands/search.py
"""
Search command.

Usage:
    dirvec search "how are refunds handled"
    dirvec search "refunds" --force
    dirvec search "refunds" --index-path /tmp/idx --api-key sk-...

Flow:
1. Resolve config (CLI > dirvec.yaml > env > defaults)
2. Sync the current directory into the vector index
3. Print the top matches
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer

from dirvec.cli.ui import display_results, display_summary, ui
from dirvec.config import CliOverrides, load_config
from dirvec.exceptions import ConfigError, DirvecError, PersistError
from dirvec.logging.logger import configure_logging, get_logger
from dirvec.logging.tags import CLI
from dirvec.sync.search import run_search

logger = get_logger(__name__)


def command(
    query: str = typer.Argument(..., help="Natural-language search query."),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Discard the ledger and rebuild the vector index from scratch.",
    ),
    api_key: Optional[str] = typer.Option(
        None,
        "--api-key",
        help="Embedding API key (defaults to OPENAI_API_KEY).",
    ),
    index_path: Optional[Path] = typer.Option(
        None,
        "--index-path",
        help="Directory for the persisted vector index.",
    ),
    metadata_path: Optional[Path] = typer.Option(
        None,
        "--metadata-path",
        help="File for the metadata ledger.",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (defaults to ./dirvec.yaml if present).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed progress and scores.",
    ),
) -> None:
    """
    Sync the current directory into the vector index and search it.
    """
    if not query.strip():
        ui.error("Query cannot be empty")
        raise typer.Exit(1)

    root = Path.cwd()
    overrides = CliOverrides(
        force_rebuild=True if force else None,
        api_key=api_key,
        index_path=index_path,
        metadata_path=metadata_path,
    )

    try:
        config = load_config(root, config_path, overrides)
    except ConfigError as e:
        ui.error(str(e))
        raise typer.Exit(1)

    configure_logging("DEBUG" if verbose else config.logging.level)
    logger.debug(f"{CLI} Search in {root}: {query!r}")

    ui.header("dirvec search", query)

    if config.force_rebuild:
        ui.info("Forcing vector update from scratch...")

    try:
        with ui.sync_progress() as on_progress:
            outcome = asyncio.run(run_search(query, config, root, on_progress=on_progress))
    except ConfigError as e:
        ui.error(str(e))
        raise typer.Exit(1)
    except PersistError as e:
        ui.error(f"Could not save index state: {e}")
        raise typer.Exit(1)
    except DirvecError as e:
        ui.error(f"Search failed: {e}")
        raise typer.Exit(1)

    display_summary(outcome.summary, verbose=verbose)
    display_results(outcome.results, show_scores=verbose)
