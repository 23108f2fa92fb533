"""structlog setup shared by the CLI and worker entry points."""

from __future__ import annotations

import logging
import sys

import structlog

from wikirank.config import debug_enabled


def configure_logging(debug: bool | None = None) -> None:
    """Configure structlog to render to stderr.

    Args:
        debug: Force debug output on or off. When None, the
            WIKIRANK_DEBUG environment variable decides.
    """
    if debug is None:
        debug = debug_enabled()
    level = logging.DEBUG if debug else logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
