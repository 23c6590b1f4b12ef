"""Domain models for assembly governance.

Contains value objects and domain models that represent
core business concepts. These models contain no infrastructure
dependencies.
"""

from src.domain.models.assembly_schedule import AssemblySchedule
from src.domain.models.assembly_state import AssemblyState
from src.domain.models.candidacy_round import (
    Candidate,
    CandidacyRound,
    TallyOutcome,
    TallyResult,
)
from src.domain.models.general_assembly import (
    AssemblyCategory,
    AssemblyWindow,
    GeneralAssembly,
)

__all__: list[str] = [
    "AssemblyCategory",
    "AssemblySchedule",
    "AssemblyState",
    "AssemblyWindow",
    "Candidate",
    "CandidacyRound",
    "GeneralAssembly",
    "TallyOutcome",
    "TallyResult",
]
