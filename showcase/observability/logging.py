from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from showcase.config import Settings

_CONFIGURED = False

_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _service_stamper(service_name: str) -> Any:
    def add_service(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return add_service


def configure_logging(settings: Settings) -> None:
    """Route structlog and stdlib (including uvicorn) records through one stdout handler.

    ``LOG_FORMAT=console`` renders coloured key/value lines for local demos;
    anything else renders one JSON object per line. Every record carries the
    service name plus whatever the request middleware bound to contextvars.

    Safe to call multiple times (no-op after first call).
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    level = _resolve_level(settings.log_level)
    shared: list[Any] = [
        structlog.contextvars.merge_contextvars,
        _service_stamper(settings.service_name),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if settings.log_format == "console":
        renderer: Any = structlog.dev.ConsoleRenderer()
    else:
        shared = [*shared, structlog.processors.format_exc_info]
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    for name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers = [handler]
        server_logger.propagate = False
        server_logger.setLevel(level)

    _CONFIGURED = True


def reset_logging() -> None:
    """Undo configure_logging (used by tests)."""

    global _CONFIGURED
    structlog.reset_defaults()
    logging.getLogger().handlers = []
    for name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers = []
        server_logger.propagate = True
    _CONFIGURED = False
