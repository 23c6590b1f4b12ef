"""Infrastructure monitoring components.

Prometheus metrics collection for assembly governance operations.
"""

from src.infrastructure.monitoring.assembly_metrics import (
    AssemblyMetricsCollector,
    get_assembly_metrics_collector,
    reset_assembly_metrics_collector,
)

__all__: list[str] = [
    "AssemblyMetricsCollector",
    "get_assembly_metrics_collector",
    "reset_assembly_metrics_collector",
]
