"""CLI commands."""

from dirvec.cli.commands import config, search

__all__ = ["config", "search"]
