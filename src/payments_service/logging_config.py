"""Structured logging configuration.

Every module logs through ``structlog.get_logger(__name__)`` with an event
name and keyword fields, e.g. ``logger.info("payment_created", payment_id=...)``.
configure_logging() decides how those events are rendered.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from payments_service.config import Settings


def _app_context(settings: Settings) -> structlog.types.Processor:
    def add_app_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("app_name", settings.app_name)
        event_dict.setdefault("app_env", settings.app_env)
        return event_dict

    return add_app_context


def configure_logging(settings: Settings) -> None:
    """Configure stdlib logging and structlog for the given settings.

    Console rendering is meant for development; set log_json for anything
    that ships logs to a collector. Loggers are cached only in production so
    tests can reconfigure or capture logs freely.
    """
    level = getattr(logging, settings.log_level)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.database_echo else logging.WARNING
    )

    renderer: structlog.types.Processor
    if settings.log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _app_context(settings),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=settings.is_production,
    )

    structlog.get_logger(__name__).debug(
        "logging_configured",
        log_level=settings.log_level,
        log_json=settings.log_json,
    )
