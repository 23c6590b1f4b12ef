"""Bootstrap wiring for assembly governance metrics."""

from __future__ import annotations

from src.application.ports.assembly_metrics import AssemblyMetricsProtocol
from src.infrastructure.monitoring.assembly_metrics import (
    get_assembly_metrics_collector,
    reset_assembly_metrics_collector,
)

_assembly_metrics: AssemblyMetricsProtocol | None = None


def get_assembly_metrics() -> AssemblyMetricsProtocol:
    """Get the assembly metrics collector instance."""
    global _assembly_metrics
    if _assembly_metrics is None:
        _assembly_metrics = get_assembly_metrics_collector()
    return _assembly_metrics


def generate_assembly_metrics() -> bytes:
    """Render the process-wide collector in Prometheus exposition format."""
    return get_assembly_metrics_collector().generate_metrics()


def set_assembly_metrics(metrics: AssemblyMetricsProtocol) -> None:
    """Set custom metrics collector (testing/override)."""
    global _assembly_metrics
    _assembly_metrics = metrics


def reset_metrics() -> None:
    """Reset metrics singletons (testing cleanup)."""
    global _assembly_metrics
    _assembly_metrics = None
    reset_assembly_metrics_collector()
