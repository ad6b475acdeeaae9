"""Shared console utilities for CLI commands."""

from rich.console import Console
from rich.markup import escape

from hbsv.service.installer import StatusLevel

# Shared console instance for all CLI commands
console = Console()

# Symbol and Rich style per status level
STATUS_STYLES: dict[str, tuple[str, str]] = {
    "info": ("ℹ", "cyan"),
    "succeed": ("✔", "green"),
    "fail": ("✖", "red"),
    "warn": ("⚠", "yellow"),
}


def status_line(message: str, level: StatusLevel = "info") -> None:
    """Print one operator-facing status line."""
    symbol, style = STATUS_STYLES.get(level, STATUS_STYLES["info"])
    console.print(f"[{style}]{symbol}[/{style}] {escape(message)}", highlight=False)


def error(msg: str) -> None:
    """Print an error message in red."""
    console.print(f"[red]{escape(msg)}[/red]")


def dim(msg: str) -> None:
    """Print a dimmed message."""
    console.print(f"[dim]{escape(msg)}[/dim]")
