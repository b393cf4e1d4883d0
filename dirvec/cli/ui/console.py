# dirvec/cli/ui/console.py
"""
Rich console setup.

Provides the shared console instance and terminal-safe symbols.
"""

from __future__ import annotations

import sys

from rich.console import Console

# Detect if we can use Unicode safely (not Windows legacy console)
CAN_USE_UNICODE = sys.platform != "win32" or (sys.stdout.encoding or "").lower() in (
    "utf-8",
    "utf8",
)

CHECK = "✓" if CAN_USE_UNICODE else "[OK]"
CROSS = "✗" if CAN_USE_UNICODE else "[X]"
WARN = "⚠" if CAN_USE_UNICODE else "[!]"
SEARCH = "🔍" if CAN_USE_UNICODE else ">"

console = Console(highlight=False)

__all__ = [
    "CAN_USE_UNICODE",
    "CHECK",
    "CROSS",
    "WARN",
    "SEARCH",
    "console",
]
