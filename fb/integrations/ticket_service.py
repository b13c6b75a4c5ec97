"""Ticket query service.

TicketService combines the REST client, the configured user, and the name
resolver into the operations the CLI and checkout workflow need. Build one
with create_ticket_service(), which also performs endpoint discovery:

    with create_ticket_service(settings) as service:
        tickets = service.get_user_tickets(bin_id=service.resolve_bin("Doing"))
"""

from __future__ import annotations

import logging
import time
from typing import Any

from fb.config.settings import Settings
from fb.integrations.client import FlowBoardsClient
from fb.integrations.comments import build_comment_payload
from fb.integrations.models import Bin, Board, Ticket, User
from fb.integrations.resolver import resolve_id

logger = logging.getLogger(__name__)


class TicketService:
    """High-level Flow Boards operations for the configured user.

    Attributes:
        client: Discovered FlowBoardsClient
        user_email: Email of the configured user
        api_seconds: Cumulative wall time spent in API calls
    """

    def __init__(self, client: FlowBoardsClient, user_email: str) -> None:
        self.client = client
        self.user_email = user_email
        self.api_seconds = 0.0
        self._current_user: User | None = None

    def __enter__(self) -> TicketService:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def get_current_user(self) -> User:
        """Fetch the configured user, once per service."""
        if self._current_user is None:
            self._current_user = self._timed(self.client.get_user, self.user_email)
        return self._current_user

    def get_user_tickets(self, bin_id: str = "", board_id: str = "") -> list[Ticket]:
        """Tickets assigned to the configured user, optionally filtered.

        Filters are passed to the server unchanged and not re-applied here.
        """
        user = self.get_current_user()
        return self.search_tickets([user.id], bin_id=bin_id, board_id=board_id)

    def search_tickets(
        self,
        user_ids: list[str],
        bin_id: str = "",
        board_id: str = "",
    ) -> list[Ticket]:
        tickets = self._timed(self.client.search_tickets, user_ids, bin_id, board_id)
        logger.debug(
            "Found %d ticket(s) for users=%s bin=%r board=%r",
            len(tickets),
            ",".join(user_ids),
            bin_id,
            board_id,
        )
        return tickets

    def get_bins(self) -> list[Bin]:
        return self._timed(self.client.get_bins)

    def get_boards(self) -> list[Board]:
        return self._timed(self.client.get_boards)

    def resolve_bin(self, candidate: str) -> str:
        """Resolve a bin name or ID to a bin ID."""
        return resolve_id(candidate, self.get_bins, "bin")

    def resolve_board(self, candidate: str) -> str:
        """Resolve a board name or ID to a board ID."""
        return resolve_id(candidate, self.get_boards, "board")

    def post_comment(self, ticket_id: str, text: str) -> str:
        """Post a comment on a ticket.

        Returns:
            The generated comment ID
        """
        payload = build_comment_payload(ticket_id, text)
        self._timed(self.client.post_comment, payload)
        logger.info("Posted comment %s on ticket %s", payload.id, ticket_id)
        return payload.id

    def _timed(self, func: Any, *args: Any) -> Any:
        start = time.perf_counter()
        try:
            return func(*args)
        finally:
            self.api_seconds += time.perf_counter() - start


def create_ticket_service(
    settings: Settings,
    client: FlowBoardsClient | None = None,
) -> TicketService:
    """Create a TicketService with a discovered REST endpoint.

    Args:
        settings: Validated configuration
        client: Optional pre-built client (tests inject one)

    Raises:
        EndpointDiscoveryError: If the REST prefix cannot be discovered
    """
    if client is None:
        client = FlowBoardsClient(settings.auth_key, timeout_seconds=settings.timeout_seconds)

    service = TicketService(client, settings.user_email)
    try:
        service._timed(client.discover_rest_prefix, settings.org_id)
    except Exception:
        client.close()
        raise
    return service


__all__ = [
    "TicketService",
    "create_ticket_service",
]
