# -*- coding: utf-8 -*-
"""Structured logging configuration using structlog.

Production renders one JSON object per line; development renders colored
console output. Request-scoped values (request id, client key, admin email)
are carried through contextvars so every log line inside a request has them.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from nestfest.core.config import get_settings

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Chatty client libraries only log warnings and above
_QUIET_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "httpx",
    "urllib3",
    "googleapiclient.discovery",
    "googleapiclient.discovery_cache",
    "apscheduler",
)


def get_log_level() -> int:
    """Get logging level from settings, falling back to INFO."""
    return _LEVELS.get(get_settings().log_level.upper(), logging.INFO)


def get_processors(json_format: bool = True) -> list[Processor]:
    """Build the structlog processor chain.

    Args:
        json_format: Render JSON when True, colored console output otherwise.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    return processors


def setup_logging() -> None:
    """Configure stdlib logging and structlog once at startup."""
    settings = get_settings()

    # Production always emits JSON; elsewhere LOG_FORMAT decides
    use_json = settings.is_production or settings.log_format == "json"

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=get_log_level(),
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=get_processors(json_format=use_json),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (usually __name__).

    Example:
        logger = get_logger(__name__)
        logger.info("Submission stored", email="a@b.co", sheet="Submissions")
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind key-value pairs to every subsequent log line in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop all bound context. Called at the end of each request."""
    structlog.contextvars.clear_contextvars()


def unbind_context(*keys: str) -> None:
    """Remove specific context keys."""
    structlog.contextvars.unbind_contextvars(*keys)
