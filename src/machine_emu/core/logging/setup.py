"""structlog configuration."""

import logging

import structlog
from structlog.types import Processor

from machine_emu.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure structlog for the process.

    Production emits one JSON object per line; everywhere else gets the
    coloured console renderer. Events below ``settings.log_level`` are
    dropped before any processor runs.
    """
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if settings.is_production
        else structlog.dev.ConsoleRenderer()
    )
    level = logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
