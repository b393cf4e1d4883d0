"""
Main dirvec CLI module.

Provides the top-level `dirvec` command.
"""

from dirvec.cli.cli import app

__all__ = ["app"]
