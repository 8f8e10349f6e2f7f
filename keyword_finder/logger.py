"""
Structured logging configuration using structlog.
Console output in development, JSON everywhere else.
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import EventDict, Processor

from keyword_finder.settings import settings


def add_service_context(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level context to all log entries"""
    event_dict["service"] = settings.app_name
    event_dict["version"] = settings.version
    event_dict["environment"] = settings.environment
    return event_dict


def truncate_text_fields(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """Keep submitted text out of the logs beyond a short preview"""
    for key in ("text", "clean_text"):
        value = event_dict.get(key)
        if isinstance(value, str) and len(value) > 80:
            event_dict[key] = value[:80] + "..."
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        add_service_context,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        truncate_text_fields,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def configure_logging():
    """Configure structlog for the service"""

    processors = _shared_processors()
    if settings.environment == "development":
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        # JSON output for production (Loki-friendly)
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
    )

    # Requests are already covered by the audit middleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance"""
    return structlog.get_logger(name)
