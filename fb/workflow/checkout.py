"""Checkout workflow.

At most one ticket is "checked out" at a time. The checkout record lives in
the StateStore and is only written after every remote step of a checkout
has succeeded, so a failed or cancelled checkout leaves the previous state
untouched.

    Empty ──checkout──▶ CheckedOut ──clear──▶ Empty
                           │  ▲
                           └──┘ checkout --force (bin checkout only)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime

from fb.formatter import format_selection_list
from fb.integrations.models import Ticket
from fb.integrations.ticket_service import TicketService
from fb.state.store import BinContext, CheckedOut, CheckoutRecord, StateStore
from fb.ui.prompts import select_ticket
from fb.utils.console import print_info, print_plain
from fb.utils.errors import (
    BinContextMissingError,
    CheckoutConflictError,
    FbError,
    NoCheckoutError,
    TicketNotAssignedError,
    TicketNotFoundError,
)
from fb.utils.logging import log_message

logger = logging.getLogger(__name__)

SelectFn = Callable[[Sequence[Ticket], str], Ticket]


def local_now() -> datetime:
    """Current local time with UTC offset, to the second."""
    return datetime.now().astimezone().replace(microsecond=0)


class CheckoutManager:
    """Drives checkout state transitions.

    Attributes:
        store: Persistent state
        connect: Returns a ready TicketService; only called once local
            preconditions pass
        select: Picks a ticket from a displayed list
        clock: Source of checkout timestamps
    """

    def __init__(
        self,
        store: StateStore,
        connect: Callable[[], TicketService],
        select: SelectFn = select_ticket,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self.store = store
        self.connect = connect
        self.select = select
        self.clock = clock

    def status(self) -> CheckoutRecord | None:
        """Return the current checkout record, or None when nothing is checked out."""
        state = self.store.load_checkout()
        return state.record if isinstance(state, CheckedOut) else None

    def checkout(
        self,
        ticket_id: str | None = None,
        bin_name: str | None = None,
        force: bool = False,
    ) -> CheckoutRecord | None:
        """Dispatch "fb checkout".

        A ticket ID wins over --bin; with neither, the last bin is reused.

        Returns:
            The new record, or None if the bin held no tickets
        """
        if ticket_id:
            return self.checkout_ticket(ticket_id)
        if bin_name:
            return self.checkout_bin(bin_name, force=force)
        return self.checkout_last_bin()

    def checkout_bin(self, bin_name: str, force: bool = False) -> CheckoutRecord | None:
        """Select and check out a ticket from a bin.

        Args:
            bin_name: Bin name or ID
            force: Replace an existing checkout

        Returns:
            The new record, or None if the bin held no tickets

        Raises:
            CheckoutConflictError: If a ticket is checked out and not force
            UserCancelledError: If selection is cancelled
            NameResolutionError: If the bin name matches nothing
            FlowBoardsApiError: On any API failure
        """
        if not force:
            self._ensure_empty(allow_force=True)

        with self.connect() as service:
            bin_id = service.resolve_bin(bin_name)
            tickets = service.get_user_tickets(bin_id=bin_id)

            if not tickets:
                print_info(f"No tickets found in bin '{bin_name}'")
                return None

            print_plain(f"Tickets in '{bin_name}' bin:\n")
            print_plain(format_selection_list(tickets), end="")
            print_plain("")
            ticket = self.select(tickets, "checkout")

        record = self._record_for(ticket, fallback_bin_id=bin_id, fallback_bin_name=bin_name)
        self.store.save_checkout(record)
        self.store.save_bin_context(BinContext(bin_id=bin_id, bin_name=bin_name))
        log_message(f"Checked out ticket {record.ticket_id} from bin {bin_name}")
        return record

    def checkout_ticket(self, ticket_id: str) -> CheckoutRecord:
        """Check out a ticket by ID without a prompt.

        The ticket must be among the user's tickets and list the user as an
        assignee. Bin context is left unchanged.

        Raises:
            CheckoutConflictError: If a ticket is already checked out
            TicketNotFoundError: If the ID is not among the user's tickets
            TicketNotAssignedError: If the user is not an assignee
            FlowBoardsApiError: On any API failure
        """
        self._ensure_empty(allow_force=False)

        with self.connect() as service:
            user = service.get_current_user()
            tickets = service.get_user_tickets()

        ticket = next((t for t in tickets if t.id == ticket_id), None)
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        if not ticket.is_assigned_to(user.id):
            raise TicketNotAssignedError(ticket_id)

        record = self._record_for(ticket)
        self.store.save_checkout(record)
        log_message(f"Checked out ticket {record.ticket_id}")
        return record

    def checkout_last_bin(self) -> CheckoutRecord | None:
        """Repeat a bin checkout using the last bin context.

        Raises:
            BinContextMissingError: If no bin checkout has happened yet
        """
        context = self.store.load_bin_context()
        if context is None:
            raise BinContextMissingError()
        logger.debug("Reusing bin context %s (%s)", context.bin_name, context.bin_id)
        return self.checkout_bin(context.bin_name, force=False)

    def clear(self) -> bool:
        """Clear the checkout. Clearing when nothing is checked out is fine.

        Returns:
            True if a record was removed
        """
        removed = self.store.clear_checkout()
        if removed:
            log_message("Checkout cleared")
        return removed

    def quick_comment(self, text: str) -> tuple[CheckoutRecord, str]:
        """Post a comment on the checked-out ticket.

        Returns:
            The checkout record and the new comment ID

        Raises:
            NoCheckoutError: If nothing is checked out
        """
        record = self.status()
        if record is None:
            raise NoCheckoutError()
        if not text.strip():
            raise FbError("comment cannot be empty")

        with self.connect() as service:
            comment_id = service.post_comment(record.ticket_id, text)
        return record, comment_id

    def _ensure_empty(self, allow_force: bool) -> None:
        state = self.store.load_checkout()
        if isinstance(state, CheckedOut):
            raise CheckoutConflictError(
                state.record.ticket_id,
                state.record.ticket_name,
                allow_force=allow_force,
            )

    def _record_for(
        self,
        ticket: Ticket,
        fallback_bin_id: str = "",
        fallback_bin_name: str = "",
    ) -> CheckoutRecord:
        return CheckoutRecord(
            ticket_id=ticket.id,
            ticket_name=ticket.name,
            bin_id=ticket.bin_id or fallback_bin_id,
            bin_name=ticket.bin_name or fallback_bin_name,
            checked_out_at=self.clock().isoformat(),
        )


__all__ = [
    "CheckoutManager",
    "local_now",
]
