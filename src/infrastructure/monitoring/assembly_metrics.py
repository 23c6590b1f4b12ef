"""Prometheus metrics for assembly governance.

Operational counters for scheduling, voting slots and delegate
elections. Labels carry service and environment like every other
collector in the process; candidate identities are never used as
labels.
"""

import os
import threading

from prometheus_client import CollectorRegistry, Counter, Gauge, generate_latest

from src.domain.models.candidacy_round import TallyOutcome
from src.domain.models.general_assembly import AssemblyCategory


class AssemblyMetricsCollector:
    """Collects assembly governance Prometheus metrics.

    Implements AssemblyMetricsProtocol.

    Attributes:
        ga_scheduled_total: Scheduled assemblies by category.
        ga_scheduling_rejected_total: Rejected scheduling attempts by reason.
        slots_reserved_total: Reserved voting slots by kind.
        slots_rejected_total: Slot requests without capacity by reason.
        candidates_registered_total: Candidate registrations.
        delegate_votes_total: Delegate ballots relayed.
        delegate_tallies_total: Concluded rounds by outcome.
        current_ga_index: Index of the current assembly.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize the collector.

        Args:
            registry: Optional custom registry for testing isolation.
        """
        self._registry = registry or CollectorRegistry()
        self._environment = os.environ.get("ENVIRONMENT", "development")
        self._service_name = os.environ.get("SERVICE_NAME", "assembly-governance")

        labels = ["service", "environment"]

        self.ga_scheduled_total = Counter(
            name="ga_scheduled_total",
            documentation="Total General Assemblies scheduled",
            labelnames=labels + ["category"],
            registry=self._registry,
        )
        self.ga_scheduling_rejected_total = Counter(
            name="ga_scheduling_rejected_total",
            documentation="Total rejected General Assembly scheduling attempts",
            labelnames=labels + ["reason"],
            registry=self._registry,
        )
        self.slots_reserved_total = Counter(
            name="ga_slots_reserved_total",
            documentation="Total voting slots reserved inside General Assemblies",
            labelnames=labels + ["kind"],
            registry=self._registry,
        )
        self.slots_rejected_total = Counter(
            name="ga_slots_rejected_total",
            documentation="Total voting slot requests that found no capacity",
            labelnames=labels + ["reason"],
            registry=self._registry,
        )
        self.candidates_registered_total = Counter(
            name="delegate_candidates_registered_total",
            documentation="Total delegate candidate registrations",
            labelnames=labels,
            registry=self._registry,
        )
        self.delegate_votes_total = Counter(
            name="delegate_votes_total",
            documentation="Total delegate ballots relayed",
            labelnames=labels,
            registry=self._registry,
        )
        self.delegate_tallies_total = Counter(
            name="delegate_tallies_total",
            documentation="Total concluded delegate election rounds",
            labelnames=labels + ["outcome"],
            registry=self._registry,
        )
        self.current_ga_index = Gauge(
            name="current_ga_index",
            documentation="Index of the current General Assembly",
            labelnames=labels,
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def _labels(self) -> dict[str, str]:
        return {"service": self._service_name, "environment": self._environment}

    def record_ga_scheduled(self, category: AssemblyCategory) -> None:
        self.ga_scheduled_total.labels(**self._labels(), category=category.value).inc()

    def record_scheduling_rejected(self, reason: str) -> None:
        self.ga_scheduling_rejected_total.labels(**self._labels(), reason=reason).inc()

    def record_slot_reserved(self, kind: str) -> None:
        self.slots_reserved_total.labels(**self._labels(), kind=kind).inc()

    def record_slot_rejected(self, reason: str) -> None:
        self.slots_rejected_total.labels(**self._labels(), reason=reason).inc()

    def record_candidate_registered(self) -> None:
        self.candidates_registered_total.labels(**self._labels()).inc()

    def record_vote_cast(self) -> None:
        self.delegate_votes_total.labels(**self._labels()).inc()

    def record_tally(self, outcome: TallyOutcome) -> None:
        self.delegate_tallies_total.labels(**self._labels(), outcome=outcome.value).inc()

    def set_cursor(self, cursor: int) -> None:
        self.current_ga_index.labels(**self._labels()).set(cursor)

    def generate_metrics(self) -> bytes:
        """Generate Prometheus exposition format output."""
        return generate_latest(self._registry)


# Singleton instance and lock
_assembly_metrics_collector: AssemblyMetricsCollector | None = None
_metrics_lock = threading.Lock()


def get_assembly_metrics_collector() -> AssemblyMetricsCollector:
    """Get the singleton AssemblyMetricsCollector instance (thread-safe).

    Uses double-checked locking for lazy initialization.

    Returns:
        The global AssemblyMetricsCollector instance.
    """
    global _assembly_metrics_collector
    if _assembly_metrics_collector is None:
        with _metrics_lock:
            if _assembly_metrics_collector is None:
                _assembly_metrics_collector = AssemblyMetricsCollector()
    return _assembly_metrics_collector


def reset_assembly_metrics_collector() -> None:
    """Reset the singleton collector (for testing only)."""
    global _assembly_metrics_collector
    with _metrics_lock:
        _assembly_metrics_collector = None
