"""fb - Flow Boards ticket viewer.

This package provides a command-line client for listing Flow Boards
tickets, commenting on them, and pinning one ticket as "checked out"
across invocations.
"""

__version__ = "1.2.0"
SCRIPT_NAME = "fb"

__all__ = [
    "__version__",
    "SCRIPT_NAME",
]
