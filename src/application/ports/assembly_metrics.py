"""Assembly metrics port.

Operational counters for scheduling, slot booking and elections.
Implementations must never raise into the calling service.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.models.candidacy_round import TallyOutcome
from src.domain.models.general_assembly import AssemblyCategory


class AssemblyMetricsProtocol(Protocol):
    """Protocol for assembly governance metrics."""

    def record_ga_scheduled(self, category: AssemblyCategory) -> None:
        """Count a scheduled assembly."""
        ...

    def record_scheduling_rejected(self, reason: str) -> None:
        """Count a rejected scheduling attempt by reason."""
        ...

    def record_slot_reserved(self, kind: str) -> None:
        """Count a reserved slot ("proposal" or "delegate_election")."""
        ...

    def record_slot_rejected(self, reason: str) -> None:
        """Count a slot request that found no capacity."""
        ...

    def record_candidate_registered(self) -> None:
        """Count a candidate registration."""
        ...

    def record_vote_cast(self) -> None:
        """Count a delegate ballot."""
        ...

    def record_tally(self, outcome: TallyOutcome) -> None:
        """Count a concluded round by outcome."""
        ...

    def set_cursor(self, cursor: int) -> None:
        """Expose the current assembly index."""
        ...
