"""Utility modules for fb.

This package contains:
- console: Rich-based terminal output utilities
- errors: Custom exceptions and exit codes
- logging: Logging configuration
"""

from fb.utils.console import (
    console,
    print_error,
    print_info,
    print_plain,
    print_success,
    print_warning,
)
from fb.utils.errors import (
    BinContextMissingError,
    CheckoutConflictError,
    ConfigError,
    ExitCode,
    FbError,
    NoCheckoutError,
    StateError,
    TicketNotAssignedError,
    TicketNotFoundError,
    UserCancelledError,
)
from fb.utils.logging import get_logger, log_message, setup_logging

__all__ = [
    # Console
    "console",
    "print_error",
    "print_success",
    "print_warning",
    "print_info",
    "print_plain",
    # Errors
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
    # Logging
    "setup_logging",
    "get_logger",
    "log_message",
]
