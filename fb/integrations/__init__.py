"""Flow Boards API integration.

This package contains:
- client: Authenticated REST client with endpoint discovery
- pagination: Page-token collection fetching with legacy array fallback
- resolver: Bin/board name to ID resolution
- comments: Comment ID generation and payloads
- ticket_service: High-level operations used by the CLI and workflow
- models: Ticket, Bin, Board, User, CommentPayload
- exceptions: API error hierarchy
"""

from fb.integrations.client import FlowBoardsClient
from fb.integrations.exceptions import (
    ApiStatusError,
    EndpointDiscoveryError,
    FlowBoardsApiError,
    NameResolutionError,
    ResponseParseError,
    TransportError,
)
from fb.integrations.models import Bin, Board, CommentPayload, Ticket, User
from fb.integrations.ticket_service import TicketService, create_ticket_service

__all__ = [
    # Client
    "FlowBoardsClient",
    "TicketService",
    "create_ticket_service",
    # Models
    "Bin",
    "Board",
    "CommentPayload",
    "Ticket",
    "User",
    # Exceptions
    "FlowBoardsApiError",
    "EndpointDiscoveryError",
    "TransportError",
    "ApiStatusError",
    "ResponseParseError",
    "NameResolutionError",
]
