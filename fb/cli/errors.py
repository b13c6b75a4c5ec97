"""Mapping of fb exceptions to process exit."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import typer

from fb.utils.console import print_error, print_info
from fb.utils.errors import ExitCode, FbError, UserCancelledError

logger = logging.getLogger(__name__)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Turn fb errors into one message line and a typer.Exit.

    Unexpected exceptions are not caught.
    """
    try:
        yield
    except UserCancelledError as e:
        print_info(str(e))
        raise typer.Exit(e.exit_code) from None
    except FbError as e:
        logger.debug("Command failed: %s", e, exc_info=True)
        print_error(str(e))
        raise typer.Exit(e.exit_code) from None
    except KeyboardInterrupt:
        print_info("\ncancelled")
        raise typer.Exit(ExitCode.USER_CANCELLED) from None


__all__ = [
    "handle_errors",
]
