"""Handlers for the root "fb" command's modes.

Each handler does the work for one flag combination and prints its result.
Errors propagate to the caller, which maps them to exit codes.
"""

from __future__ import annotations

from fb.cli.context import CliContext
from fb.formatter import format_bins, format_boards, format_status, format_tickets
from fb.utils.console import print_metric, print_plain, print_success
from fb.workflow.comment import comment_interactively


def list_tickets(ctx: CliContext, bin_name: str | None = None, board_name: str | None = None) -> None:
    """Print the user's tickets, optionally filtered by bin and/or board."""
    with ctx.connect() as service:
        bin_id = service.resolve_bin(bin_name) if bin_name else ""
        board_id = service.resolve_board(board_name) if board_name else ""
        tickets = service.get_user_tickets(bin_id=bin_id, board_id=board_id)
        api_seconds = service.api_seconds

    record = ctx.checkout_manager().status()
    print_plain(format_tickets(tickets, record.ticket_id if record else None), end="")

    if ctx.verbose:
        print_metric(f"API request time: {api_seconds:.3f}s")


def list_bins(ctx: CliContext) -> None:
    with ctx.connect() as service:
        bins = service.get_bins()
    print_plain(format_bins(bins), end="")


def list_boards(ctx: CliContext) -> None:
    with ctx.connect() as service:
        boards = service.get_boards()
    print_plain(format_boards(boards), end="")


def show_status(ctx: CliContext) -> None:
    """Print the current checkout. Needs no configuration or network."""
    print_plain(format_status(ctx.checkout_manager().status()), end="")


def quick_comment(ctx: CliContext, text: str) -> None:
    record, _ = ctx.checkout_manager().quick_comment(text)
    print_success(f"Comment added to: {record.ticket_name}")


def interactive_comment(ctx: CliContext, bin_name: str | None = None) -> None:
    with ctx.connect() as service:
        ticket = comment_interactively(service, bin_name)
    if ticket is not None:
        print_success(f"Comment added successfully to ticket: {ticket.name}")


__all__ = [
    "list_tickets",
    "list_bins",
    "list_boards",
    "show_status",
    "quick_comment",
    "interactive_comment",
]
