"""Assembly state repository port.

Persists the schedule, cursor, statute hash and in-flight candidacy
round so they survive a process restart. The storage format is up to
the adapter.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.models.assembly_state import AssemblyState


class AssemblyStateRepositoryProtocol(Protocol):
    """Protocol for assembly state persistence."""

    def save(self, state: AssemblyState) -> None:
        """Persist the full state, replacing any previous snapshot.

        Args:
            state: Current assembly state.
        """
        ...

    def load(self) -> AssemblyState | None:
        """Load the last saved state.

        Returns:
            The saved AssemblyState, or None if nothing was saved yet.
        """
        ...
