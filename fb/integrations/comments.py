"""Comment ID generation and payload building."""

from __future__ import annotations

import base64
import secrets

from fb.integrations.models import CommentPayload

COMMENT_ID_BYTES = 13


def generate_comment_id() -> str:
    """Return a random 18-character URL-safe comment ID.

    13 random bytes, base64url encoded without padding.
    """
    raw = secrets.token_bytes(COMMENT_ID_BYTES)
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def build_comment_payload(ticket_id: str, text: str, comment_id: str | None = None) -> CommentPayload:
    """Build the payload for a new comment on ticket_id."""
    return CommentPayload(
        id=comment_id or generate_comment_id(),
        ticket_id=ticket_id,
        comment=text,
    )


__all__ = [
    "COMMENT_ID_BYTES",
    "generate_comment_id",
    "build_comment_payload",
]
