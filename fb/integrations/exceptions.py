"""Custom exceptions for Flow Boards API operations.

This module defines the exception hierarchy for the integrations package:
- FlowBoardsApiError: Base exception for all API failures
- EndpointDiscoveryError: REST prefix could not be discovered
- TransportError: Network failure or timeout, no response received
- ApiStatusError: Server answered with a non-2xx status
- ResponseParseError: Response body was not the expected JSON shape
- NameResolutionError: Bin/board name matched nothing in the collection

Messages always start with the call-site context (e.g. "failed to get
bins: ...") so a single line identifies which call failed.
"""

from __future__ import annotations

from fb.utils.errors import ExitCode, FbError

# Non-2xx response bodies are cut to this length in error messages
MAX_ERROR_BODY_LENGTH = 500


class FlowBoardsApiError(FbError):
    """Base exception for Flow Boards API failures.

    Attributes:
        original_error: The underlying error if available
    """

    _default_exit_code = ExitCode.API_ERROR

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        self.original_error = original_error
        super().__init__(message)


class EndpointDiscoveryError(FlowBoardsApiError):
    """Raised when the organization's REST prefix cannot be discovered."""


class TransportError(FlowBoardsApiError):
    """Raised when a request fails before any response is received.

    Covers connection failures and the fixed per-request timeout. These are
    never retried.
    """


class ApiStatusError(FlowBoardsApiError):
    """Raised when the API answers with a status outside 2xx.

    Attributes:
        status_code: HTTP status code returned
        body: Response body, truncated to MAX_ERROR_BODY_LENGTH
    """

    def __init__(self, context: str, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = truncate_body(body)
        super().__init__(
            f"{context}: API request failed with status {status_code}: {self.body}"
        )


class ResponseParseError(FlowBoardsApiError):
    """Raised when a response body cannot be decoded into the expected shape.

    Attributes:
        raw_response: The raw response that failed to parse (truncated)
    """

    def __init__(
        self,
        message: str,
        raw_response: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.raw_response = truncate_body(raw_response) if raw_response is not None else None
        super().__init__(message, original_error=original_error)


class NameResolutionError(FbError):
    """Raised when a bin or board name matches nothing.

    Attributes:
        kind: "bin" or "board"
        candidate: The name that could not be resolved
    """

    def __init__(self, kind: str, candidate: str) -> None:
        self.kind = kind
        self.candidate = candidate
        super().__init__(f"failed to find {kind} '{candidate}': {kind} not found: {candidate}")


def truncate_body(body: str) -> str:
    """Strip and shorten a response body for inclusion in a message."""
    body = body.strip()
    if len(body) > MAX_ERROR_BODY_LENGTH:
        return body[:MAX_ERROR_BODY_LENGTH] + "..."
    return body


__all__ = [
    "MAX_ERROR_BODY_LENGTH",
    "FlowBoardsApiError",
    "EndpointDiscoveryError",
    "TransportError",
    "ApiStatusError",
    "ResponseParseError",
    "NameResolutionError",
    "truncate_body",
]
