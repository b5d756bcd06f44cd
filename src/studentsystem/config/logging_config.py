"""structlog setup.

Log events go to stderr so stdout only carries report lines.
"""

from __future__ import annotations

import logging
import sys

import structlog


def _stderr_logger_factory(*args) -> structlog.PrintLogger:
    # Resolve sys.stderr per logger, it may be swapped after configuration
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog at the given level name (DEBUG, INFO, ...).

    Unknown level names fall back to INFO.
    """
    numeric_level = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )
