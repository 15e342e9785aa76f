"""
Structured logging setup.

Every module gets its logger through get_logger(__name__) and logs
key/value pairs::

    logger = get_logger(__name__)
    logger.info("Slip created", order_id=order.order_id)

setup_logging() is called once by entry points (demo script, tests).
Without it structlog falls back to its default console output.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from fulfillment.core.config import settings


def setup_logging(level: str | None = None, json: bool | None = None) -> None:
    """
    Configure stdlib logging and structlog.

    Args:
        level: Log level name.  Defaults to settings.LOG_LEVEL.
        json: Render JSON lines instead of the console format.
              Defaults to settings.LOG_JSON, and is always on when
              APP_ENV is production or staging.
    """
    log_level = (level or settings.LOG_LEVEL).upper()
    use_json = json
    if use_json is None:
        use_json = settings.LOG_JSON or settings.APP_ENV in ("production", "staging")

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound to the given module name."""
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind context variables included in all subsequent log lines."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context(*keys: str) -> None:
    """Unbind the given context variables, or all of them when none are given."""
    if keys:
        structlog.contextvars.unbind_contextvars(*keys)
    else:
        structlog.contextvars.clear_contextvars()
