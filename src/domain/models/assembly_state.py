"""Persistable assembly governance state."""

from __future__ import annotations

from dataclasses import dataclass

from src.domain.models.assembly_schedule import AssemblySchedule
from src.domain.models.candidacy_round import CandidacyRound


@dataclass
class AssemblyState:
    """Everything that must survive a process restart.

    Attributes:
        schedule: Ordered assemblies, cursor, statute hash and convened
            proposal ids.
        candidacy_round: The in-flight candidacy round, or None when no
            round is open.
    """

    schedule: AssemblySchedule
    candidacy_round: CandidacyRound | None = None
