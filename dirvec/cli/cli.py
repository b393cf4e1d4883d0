# dirvec/cli/cli.py
"""
Main dirvec CLI.

Commands:
    dirvec search "query"     Sync the current directory and search it
    dirvec config             Show the resolved configuration
"""

from __future__ import annotations

import typer

from dirvec.cli.commands import config as config_cmd
from dirvec.cli.commands import search as search_cmd

app = typer.Typer(
    help="dirvec - incremental vector search over the current directory",
    no_args_is_help=True,
)

app.command("search")(search_cmd.command)
app.command("config")(config_cmd.command)


if __name__ == "__main__":
    app()
