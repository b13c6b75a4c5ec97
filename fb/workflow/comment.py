"""Interactive comment mode ("fb --comment")."""

from __future__ import annotations

from collections.abc import Callable

from fb.integrations.models import Ticket
from fb.integrations.ticket_service import TicketService
from fb.ui.prompts import prompt_comment, select_ticket
from fb.utils.console import print_info, print_plain


def format_comment_choices(tickets: list[Ticket]) -> str:
    return "".join(
        f"{i}. {t.id} - {t.name} [{t.status}]\n" for i, t in enumerate(tickets, start=1)
    )


def comment_interactively(
    service: TicketService,
    bin_name: str | None = None,
    select: Callable[..., Ticket] = select_ticket,
    enter_comment: Callable[[], str] = prompt_comment,
) -> Ticket | None:
    """List the user's tickets, let them pick one, and post a comment.

    Args:
        service: Connected ticket service
        bin_name: Optional bin name or ID to narrow the list

    Returns:
        The ticket commented on, or None if there were no tickets

    Raises:
        UserCancelledError: If selection or entry is cancelled
    """
    bin_id = service.resolve_bin(bin_name) if bin_name else ""
    tickets = service.get_user_tickets(bin_id=bin_id)

    if not tickets:
        if bin_name:
            print_info(f"No tickets found in bin '{bin_name}'. Cannot add comment.")
        else:
            print_info("No tickets assigned to you. Cannot add comment.")
        return None

    print_plain(format_comment_choices(tickets), end="")
    ticket = select(tickets, "comment on")
    print_info(f"Selected: {ticket.name}")

    text = enter_comment()
    print_info("Posting comment...")
    service.post_comment(ticket.id, text)
    return ticket


__all__ = [
    "format_comment_choices",
    "comment_interactively",
]
