"""The "fb checkout" and "fb clear" subcommands."""

from typing import Annotated, Optional

import typer

from fb.cli.context import CliContext
from fb.cli.errors import handle_errors
from fb.utils.console import print_success


def checkout(
    ctx: typer.Context,
    ticket_id: Annotated[
        Optional[str],
        typer.Argument(help="Ticket ID to check out directly"),
    ] = None,
    bin_name: Annotated[
        Optional[str],
        typer.Option("--bin", help="Pick a ticket from this bin (name or ID)"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Replace the current checkout"),
    ] = False,
) -> None:
    """Check out a ticket for quick comments.

    With no arguments, repeats the last bin checkout.
    """
    state: CliContext = ctx.obj
    with handle_errors():
        record = state.checkout_manager().checkout(ticket_id=ticket_id, bin_name=bin_name, force=force)
        if record is not None:
            print_success(f"Checked out: {record.ticket_name}")


def clear(ctx: typer.Context) -> None:
    """Clear the current checkout."""
    state: CliContext = ctx.obj
    with handle_errors():
        state.checkout_manager().clear()
        print_success("Checkout cleared")


__all__ = [
    "checkout",
    "clear",
]
