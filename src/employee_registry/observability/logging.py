"""
employee_registry.observability.logging

Structured logging for the data-access layer.

Responsibilities:
- Configure `structlog` from `Settings` for JSON lines, filtered by `log_level`.
- Stamp every event with the service name and deployment env.
- Hand out loggers, optionally pre-bound to repository context (entity name).
- Keep driver chatter (aiosqlite, SQLAlchemy pool) out of application logs.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

from employee_registry.settings import Settings, get_settings

# Libraries that log per statement or per connection at DEBUG/INFO.
_NOISY_LOGGERS = ("aiosqlite", "sqlalchemy.pool")


def configure_logging(settings: Settings | None = None) -> None:
    """
    Route structlog through stdlib logging at the configured level.

    Safe to call more than once; the last call wins.
    """

    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    logging.getLogger().setLevel(level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _deployment_fields(settings.service_name, settings.env),
        structlog.processors.dict_tracebacks,
        structlog.processors.JSONRenderer(sort_keys=True),
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _deployment_fields(service_name: str, env: str):
    def processor(
        _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
    ) -> MutableMapping[str, Any]:
        event_dict.setdefault("service", service_name)
        event_dict.setdefault("env", env)
        return event_dict

    return processor


def get_logger(name: str, **context: Any) -> structlog.stdlib.BoundLogger:
    """Logger for `name`, with `context` bound onto every event it emits."""

    logger = structlog.get_logger(name)
    return logger.bind(**context) if context else logger


# --- Module Notes -----------------------------------------------------------
# Until `configure_logging()` runs, structlog's defaults apply and events still
# print; the hosting process decides when (and whether) to call it.
