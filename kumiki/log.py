"""Structured logging setup for kumiki."""
import logging
import os
import sys
from typing import TextIO

import structlog

from kumiki.constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def resolve_level(level: str | None = None) -> str:
    """
    Pick the log level from `level`, then the KUMIKI_LOG_LEVEL environment
    variable, then WARNING. Unknown names fall back to WARNING.
    """
    name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    if name not in VALID_LEVELS:
        return DEFAULT_LOG_LEVEL
    return name


def configure_logging(level: str | None = None, stream: TextIO | None = None) -> None:
    """
    Configure structlog to write key/value events to stderr.

    Example:
        KUMIKI_LOG_LEVEL=DEBUG kumiki 'ul>li*3'
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(resolve_level(level))
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )
