"""CLI interface for fb.

This package provides the Typer-based command-line interface.
"""

from fb.cli.app import app, main, run_mode, version_callback
from fb.cli.checkout import checkout, clear
from fb.cli.context import CliContext
from fb.cli.errors import handle_errors

__all__ = [
    # app.py
    "app",
    "main",
    "run_mode",
    "version_callback",
    # checkout.py
    "checkout",
    "clear",
    # context.py
    "CliContext",
    # errors.py
    "handle_errors",
]
