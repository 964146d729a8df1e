"""
split-timer logging - structured diagnostics on stderr.

The timer reports non-fatal conditions (missing callback, duplicate checkpoint
key, suppressed misuse) as structured warnings. Diagnostics are written to the
process's standard error stream and never to standard output, so they cannot
interleave with anything a host writes to stdout.

Manifesto:
    - **Structured:** Event names plus key/value fields, not prose
    - **stderr only:** Loggers wrap stdlib loggers; stdlib's last-resort
      handler and ``configure_logging`` both target ``sys.stderr``
    - **Flexible:** Console output for development, JSON for production

Architecture:
    ::

        configure_logging(level="INFO", json_format=True, service="api")
            ↓
        structlog configured with processor chain:
          1. TimeStamper
          2. add_log_level
          3. add_service_metadata
          4. elasticsearch_compatible (JSON only)
          5. JSONRenderer (or ConsoleRenderer for dev)
            ↓
        stdlib logging → StreamHandler(sys.stderr)

Examples:
    >>> from split_timer.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=True, service="orders-api")
    >>> logger = get_logger(__name__)
    >>> logger.warning("duplicate_split_key", key="db")

Tags:
    logging, structlog, observability, split-timer

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from split_timer.settings import SplitTimerSettings

_SERVICE_NAME = "split-timer"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def _elasticsearch_compatible(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Make field names Elasticsearch/ECS compatible."""
    if "timestamp" in event_dict:
        event_dict["@timestamp"] = event_dict.pop("timestamp")

    if "level" in event_dict:
        event_dict["log.level"] = event_dict.pop("level")

    return event_dict


def configure_logging(
    level: str = "WARNING",
    json_format: bool | None = None,
    service: str = "split-timer",
    add_timestamp: bool = True,
) -> None:
    """Configure structured diagnostics.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if
            stderr is not a tty)
        service: Service name to include in logs
        add_timestamp: Include ISO timestamp in logs
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    if json_format is None:
        json_format = not sys.stderr.isatty()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if add_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        shared_processors.append(_elasticsearch_compatible)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper()),
    )


def configure_from_settings(settings: SplitTimerSettings | None = None) -> None:
    """Configure diagnostics from ``SPLIT_TIMER_LOG_LEVEL`` / ``SPLIT_TIMER_JSON_LOGS``."""
    settings = settings or SplitTimerSettings()
    configure_logging(level=settings.log_level, json_format=settings.json_logs)


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger that writes to stderr.

    The returned logger wraps a stdlib logger, so an application that never
    calls :func:`configure_logging` still gets warnings on stderr through
    stdlib's last-resort handler.
    """
    return structlog.wrap_logger(logging.getLogger(name or "split_timer"))


__all__ = [
    "configure_logging",
    "configure_from_settings",
    "get_logger",
]
