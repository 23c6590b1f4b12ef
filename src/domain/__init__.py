"""
Domain layer - Pure business logic for assembly governance.

This layer contains:
- Domain models (GeneralAssembly, AssemblySchedule, CandidacyRound)
- Domain services (interval validation, tally)
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure, or bootstrap.
Only stdlib and typing imports are allowed.
"""

from src.domain.exceptions import AssemblyError

__all__: list[str] = ["AssemblyError"]
