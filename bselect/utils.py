"""Logging and formatting utilities for bselect.

stdout is reserved for the selected branch names so that ``bselect`` can
be used inside command substitution. Every diagnostic goes to stderr.
"""

from __future__ import annotations

import logging
import os
import sys


# Color codes - respect TERM environment variable
def _should_use_colors() -> bool:
    """Check if colors should be used based on TERM environment variable."""
    term = os.environ.get("TERM", "")
    if not term or term == "dumb":
        return False
    return True


_USE_COLORS = _should_use_colors()

# ANSI color codes
BOLD = "\033[1m" if _USE_COLORS else ""
RESET = "\033[0m" if _USE_COLORS else ""
RED = "\033[91m" if _USE_COLORS else ""
YELLOW = "\033[93m" if _USE_COLORS else ""


class BselectFormatter(logging.Formatter):
    """Formatter producing ``bselect: ...`` prefixed lines."""

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI color codes in output.
        """
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record.

        Args:
            record: The log record to format.

        Returns:
            The formatted log message.
        """
        msg = record.getMessage()

        if record.levelno == logging.DEBUG:
            return f"bselect: DEBUG: {msg}"
        elif record.levelno >= logging.ERROR:
            color, reset = (RED, RESET) if self.use_colors else ("", "")
            return f"{color}bselect: {msg}{reset}"
        elif record.levelno == logging.WARNING:
            color, reset = (YELLOW, RESET) if self.use_colors else ("", "")
            return f"{color}bselect: warning: {msg}{reset}"

        return f"bselect: {msg}"


# Configure module-level logger
_logger = logging.getLogger("bselect")
_logger.setLevel(logging.DEBUG)

# Only add handler if one doesn't exist
if not _logger.handlers:
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setLevel(logging.DEBUG)
    _handler.setFormatter(BselectFormatter(use_colors=_USE_COLORS))
    _logger.addHandler(_handler)


def _debug_enabled() -> bool:
    return os.environ.get("BSELECT_DEBUG") == "1"


def log_debug(msg: str) -> None:
    """Log a debug message (only if BSELECT_DEBUG=1).

    Args:
        msg: The message to log.
    """
    if _debug_enabled():
        _logger.debug(msg)


def log_warn(msg: str) -> None:
    """Log a warning message to stderr.

    Args:
        msg: The message to log.
    """
    _logger.warning(msg)


def log_error(msg: str) -> None:
    """Log an error message to stderr.

    Args:
        msg: The message to log.
    """
    _logger.error(msg)
