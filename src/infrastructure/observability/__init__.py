"""Observability infrastructure for structured logging.

Usage:
    from src.infrastructure.observability import configure_structlog

    # At startup
    configure_structlog(environment="production")
"""

from src.infrastructure.observability.logging import (
    add_service_context,
    configure_structlog,
    render_governance_values,
)

__all__: list[str] = [
    "add_service_context",
    "configure_structlog",
    "render_governance_values",
]
