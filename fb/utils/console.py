"""Rich-based terminal output utilities.

Errors and warnings go to stderr; everything else to stdout. Messages are
escaped before printing because ticket and bin names are user content and
may contain Rich markup characters such as "[".
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a warning message to stderr."""
    err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message with a check mark."""
    console.print(f"[green]✓[/green] {escape(message)}")


def print_info(message: str) -> None:
    """Print an informational message."""
    console.print(escape(message))


def print_plain(text: str, end: str = "\n") -> None:
    """Print pre-formatted text verbatim, without markup."""
    console.print(text, markup=False, end=end)


def print_metric(message: str) -> None:
    """Print a performance metric line to stderr."""
    err_console.print(escape(message), style="dim")


__all__ = [
    "console",
    "err_console",
    "print_error",
    "print_warning",
    "print_success",
    "print_info",
    "print_plain",
    "print_metric",
]
