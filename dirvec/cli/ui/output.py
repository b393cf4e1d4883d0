# dirvec/cli/ui/output.py
"""
Output methods for CLI display.
"""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax

from .console import CHECK, CROSS, WARN, console


class OutputMixin:
    """Mixin providing output methods for the UI class."""

    def print(self, msg: str, style: str = "") -> None:
        """Print plain text, optionally styled. Text is never parsed as markup."""
        console.print(msg, style=style or None, markup=False, soft_wrap=True)

    def header(self, title: str, subtitle: str = "") -> None:
        """Print a command header in a fitted box."""
        if subtitle:
            content = f"[bold]{escape(title)}[/bold]\n[dim]{escape(subtitle)}[/dim]"
        else:
            content = f"[bold]{escape(title)}[/bold]"
        console.print(Panel.fit(content, border_style="blue"))

    def section(self, title: str) -> None:
        console.print(f"\n[bold cyan]{escape(title)}[/bold cyan]", soft_wrap=True)

    def success(self, msg: str) -> None:
        console.print(f"[green]{CHECK}[/green] {escape(msg)}", soft_wrap=True)

    def error(self, msg: str) -> None:
        console.print(f"[red]{CROSS}[/red] {escape(msg)}", soft_wrap=True)

    def warning(self, msg: str, detail: str = "") -> None:
        detail_str = f" [dim]({escape(detail)})[/dim]" if detail else ""
        console.print(f"[yellow]{WARN}[/yellow] {escape(msg)}{detail_str}", soft_wrap=True)

    def info(self, msg: str) -> None:
        console.print(f"[dim]{escape(msg)}[/dim]", soft_wrap=True)

    def syntax(self, code: str, language: str = "yaml") -> None:
        """Print syntax-highlighted code."""
        console.print(Syntax(code, language, theme="monokai"))
