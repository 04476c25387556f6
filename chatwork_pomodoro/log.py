"""
Logging configuration for the notifier.

structlog renders on top of the standard library ``logging`` module so that
third-party libraries (aiohttp) share the same stream and level.
"""
import logging
import sys
from datetime import datetime

import structlog


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
) -> None:
    """
    Configure structlog for the whole process.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, render JSON lines; otherwise console output
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(message)s"
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, typically ``get_logger(__name__)``."""
    return structlog.get_logger(name)


def log_cycle_transition(
    logger: structlog.stdlib.BoundLogger,
    from_state: str,
    to_state: str,
    next_state_at: datetime,
) -> None:
    """
    Log a working/resting flip with a standardized shape.

    Args:
        logger: Structlog logger instance
        from_state: State the cycle is leaving
        to_state: State the cycle is entering
        next_state_at: When the entered state ends
    """
    logger.bind(
        from_state=from_state,
        to_state=to_state,
        next_state_at=next_state_at.isoformat(),
    ).info("State transition")
