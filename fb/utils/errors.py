"""Custom exceptions and exit codes for fb.

Every user-facing failure derives from FbError, which carries the
process exit code the CLI should terminate with.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    CONFIG_ERROR = 2
    API_ERROR = 3
    USER_CANCELLED = 4
    CHECKOUT_CONFLICT = 5


class FbError(Exception):
    """Base exception for fb.

    Subclasses set _default_exit_code; callers may override it per instance.
    """

    _default_exit_code = ExitCode.GENERAL_ERROR

    def __init__(self, message: str, exit_code: ExitCode | None = None) -> None:
        super().__init__(message)
        self.exit_code = exit_code if exit_code is not None else self._default_exit_code


class ConfigError(FbError):
    """Raised when the local configuration is missing or invalid."""

    _default_exit_code = ExitCode.CONFIG_ERROR


class UserCancelledError(FbError):
    """Raised when the user cancels an interactive prompt."""

    _default_exit_code = ExitCode.USER_CANCELLED


class StateError(FbError):
    """Raised when local checkout state cannot be written or removed."""


class CheckoutConflictError(FbError):
    """Raised when a checkout is attempted while another ticket is checked out.

    Attributes:
        ticket_id: ID of the ticket currently checked out
        ticket_name: Display name of the ticket currently checked out
    """

    _default_exit_code = ExitCode.CHECKOUT_CONFLICT

    def __init__(
        self,
        ticket_id: str,
        ticket_name: str,
        allow_force: bool = True,
        exit_code: ExitCode | None = None,
    ) -> None:
        self.ticket_id = ticket_id
        self.ticket_name = ticket_name
        remedy = "Use 'fb clear' or 'fb checkout --force'" if allow_force else "Use 'fb clear' first"
        super().__init__(f"ticket already checked out: {ticket_name}\n{remedy}", exit_code)


class TicketNotFoundError(FbError):
    """Raised when a ticket ID is absent from the user's ticket set."""

    def __init__(self, ticket_id: str, exit_code: ExitCode | None = None) -> None:
        self.ticket_id = ticket_id
        super().__init__(f"ticket {ticket_id} not found among your tickets", exit_code)


class TicketNotAssignedError(FbError):
    """Raised when a ticket exists but the current user is not an assignee."""

    def __init__(self, ticket_id: str, exit_code: ExitCode | None = None) -> None:
        self.ticket_id = ticket_id
        super().__init__(f"ticket {ticket_id} is not assigned to you", exit_code)


class NoCheckoutError(FbError):
    """Raised when an operation needs a checked-out ticket and there is none."""

    def __init__(self, message: str = "no ticket checked out. Use 'fb checkout' first") -> None:
        super().__init__(message)


class BinContextMissingError(FbError):
    """Raised when a bare checkout has no previous bin to repeat."""

    def __init__(
        self,
        message: str = "no bin context found. Use 'fb checkout --bin \"Bin Name\"' first",
    ) -> None:
        super().__init__(message)


__all__ = [
    "ExitCode",
    "FbError",
    "ConfigError",
    "UserCancelledError",
    "StateError",
    "CheckoutConflictError",
    "TicketNotFoundError",
    "TicketNotAssignedError",
    "NoCheckoutError",
    "BinContextMissingError",
]
