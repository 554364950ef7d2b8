"""
Logging configuration for the finder.

Results go to stdout, so every log record (warnings about unexpected
mongo-like processes, verbose per-process diagnostics) goes to stderr.
"""

import logging
import sys
from typing import Optional

from .config import get_finder_settings

_MODULE_LOGGER = logging.getLogger(__name__)


def _close_handlers(logger: logging.Logger) -> None:
    """Close all handlers for a logger, logging any errors."""
    for handler in list(logger.handlers):
        try:
            handler.close()
        except OSError as e:  # Best-effort cleanup operation  # policy_guard: allow-silent-handler
            _MODULE_LOGGER.debug("Handler close failed for logger '%s': %s", logger.name, e)


def _build_console_handler(level: int) -> logging.Handler:
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler.setLevel(level)
    return console_handler


def setup_logging(verbose: bool = False, level: Optional[int] = None) -> None:
    """Configure the root logger with a single stderr handler."""

    if level is None:
        level = get_finder_settings().log_level
    if verbose:
        level = min(level, logging.INFO)

    root_logger = logging.getLogger()
    _close_handlers(root_logger)
    root_logger.handlers = []

    root_logger.addHandler(_build_console_handler(level))
    root_logger.setLevel(level)
