"""Logging configuration for fb.

File logging is opt-in through environment variables:

    FB_LOG=true             enable logging to a file
    FB_LOG_FILE=/path/log   override the log file (default ~/.fb/fb.log)

The --verbose flag additionally streams debug records to stderr.
Modules log through logging.getLogger(__name__), so every record lands
under the "fb" logger configured here.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

LOGGER_NAME = "fb"
LOG_ENABLED = os.environ.get("FB_LOG", "false").lower() in ("true", "1", "yes")
LOG_FILE = Path(os.environ.get("FB_LOG_FILE", str(Path.home() / ".fb" / "fb.log")))
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_logger: logging.Logger | None = None


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the package logger.

    Safe to call more than once; handlers are replaced, not stacked.

    Args:
        verbose: Stream DEBUG records to stderr

    Returns:
        The configured "fb" logger
    """
    global _logger

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    formatter = logging.Formatter(LOG_FORMAT)

    if LOG_ENABLED:
        try:
            LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(LOG_FILE)
        except OSError as e:
            print(f"fb: cannot open log file {LOG_FILE}: {e}", file=sys.stderr)
        else:
            file_handler.setFormatter(formatter)
            file_handler.setLevel(logging.DEBUG)
            logger.addHandler(file_handler)

    if verbose:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        stream_handler.setLevel(logging.DEBUG)
        logger.addHandler(stream_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Return the package logger, configuring it on first use."""
    if _logger is None:
        return setup_logging()
    return _logger


def log_message(message: str, level: int = logging.INFO) -> None:
    """Write a single message to the package log."""
    get_logger().log(level, message)


__all__ = [
    "LOG_ENABLED",
    "LOG_FILE",
    "setup_logging",
    "get_logger",
    "log_message",
]
