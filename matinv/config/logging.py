"""
structlog setup for the inventory service.

Events are JSON lines outside development and colored console lines while
developing. Request-scoped fields (request id, method, path, acting user) are
bound through contextvars by the API layer and merged into every event.
"""

import logging
import sys
from collections.abc import Mapping
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from matinv.config.settings import get_settings

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("aiosqlite", "uvicorn.access")


def drop_none_values(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Omit keys logged as None, e.g. `traceback=None` on client errors."""
    return {key: value for key, value in event_dict.items() if value is not None}


def static_fields(fields: Mapping[str, Any]) -> Processor:
    """Processor that stamps the same fields on every event."""
    frozen = dict(fields)

    def add_fields(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in frozen.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_fields


def configure_logging(json_logs: bool | None = None, level: str | None = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        json_logs: Force JSON (True) or console (False) rendering.
            Defaults to console in development and JSON elsewhere.
        level: Overrides settings.log_level.
    """
    settings = get_settings()
    if json_logs is None:
        json_logs = settings.environment != "development"
    level = (level or settings.log_level).upper()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        static_fields({"service": settings.app_name, "environment": settings.environment}),
        drop_none_values,
    ]
    if json_logs:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_log_context(**values: Any) -> None:
    """Attach key/values to every log event in the current context."""
    structlog.contextvars.bind_contextvars(**values)


def clear_log_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
