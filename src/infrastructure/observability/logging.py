"""Structured logging configuration with structlog.

Configures structlog once for the process hosting assembly governance:
JSON lines in production, a colored console elsewhere. Every entry is
stamped with the service name and environment (the same values the
Prometheus collector uses as labels), and governance values such as
assembly times, durations and proposal ids are rendered as plain JSON
scalars.

Log Entry Format (production):
    {
        "timestamp": "2026-01-01T00:00:00.000000Z",
        "level": "info",
        "event": "ga_scheduled",
        "service": "assembly-governance",
        "environment": "production",
        "component": "assembly_scheduling",
        ...additional context
    }

Usage:
    from src.infrastructure.observability import configure_structlog

    configure_structlog(environment="production")
"""

import logging
import os
from collections.abc import MutableMapping
from datetime import datetime, timedelta
from enum import Enum
from typing import Any
from uuid import UUID

import structlog
from structlog.typing import EventDict, Processor

# Environment variable for log level (default: INFO)
LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_SERVICE_NAME = "assembly-governance"


def _get_log_level() -> int:
    """Get the configured log level from environment.

    Returns:
        The logging level integer (e.g., logging.INFO).
    """
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def add_service_context(service_name: str, environment: str) -> Processor:
    """Build a processor that stamps service and environment on each entry.

    Values already bound by the caller win.
    """

    def processor(
        logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
    ) -> EventDict:
        event_dict.setdefault("service", service_name)
        event_dict.setdefault("environment", environment)
        return event_dict

    return processor


def _render_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value


def render_governance_values(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> EventDict:
    """Render datetimes, durations, UUIDs and enums as JSON scalars.

    Datetimes become ISO 8601 strings, timedeltas become seconds.
    """
    for key, value in event_dict.items():
        event_dict[key] = _render_value(value)
    return event_dict


def configure_structlog(environment: str = "production") -> None:
    """Configure structlog for the process.

    Should be called once at startup. Context bound with
    structlog.contextvars (for example a request id set by the hosting
    process) is merged into every entry.

    Args:
        environment: 'production' for JSON output, anything else for
            colored console output. Defaults to 'production'.
    """
    service_name = os.environ.get("SERVICE_NAME", DEFAULT_SERVICE_NAME)
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_service_context(service_name, environment),
        render_governance_values,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if environment == "production":
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
