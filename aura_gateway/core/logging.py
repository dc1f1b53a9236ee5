"""Structured logging setup."""

import logging
import sys

import structlog

from aura_gateway.core.config import settings


def setup_logging() -> None:
    """
    Configure structlog and the standard library root logger.

    Log lines are rendered as JSON in production and as colored key-value
    pairs when LOG_FORMAT=console. The request id bound by the request
    context middleware is merged into every event from contextvars.
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.log_format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    # uvicorn access lines duplicate the request logging middleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
