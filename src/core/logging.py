"""Structured logging setup using structlog."""

import logging
import sys

import structlog

from src.core.config import settings


def setup_logging(
    level: str | None = None,
    log_format: str | None = None,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Log level name, defaults to settings.log_level
        log_format: "json" for machine-readable output, anything else
            renders colourless key=value lines for local development
    """
    level_name = (level or settings.log_level).upper()
    log_format = log_format or settings.log_format
    log_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
        force=True,
    )

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
