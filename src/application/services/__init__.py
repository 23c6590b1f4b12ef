"""Application services - Use case orchestration.

This module contains application services that orchestrate domain
operations and coordinate with collaborator ports.

Available services:
- GeneralAssemblyService: Entry points for hosting processes
- AssemblySchedulingService: Regular and extraordinary GA insertion
- SlotAllocationService: Proposal and delegate election voting slots
- CandidacyRegistryService: Delegate candidates and votes
- DelegateElectionService: Quorum/majority tally and winner commit
- AssemblyLifecycleService: Cursor advancement and statute updates
- CallerGuard: Authorization checks for mutating entry points
- TimeAuthorityService: System clock
"""

from src.application.services.assembly_lifecycle_service import (
    AssemblyLifecycleService,
)
from src.application.services.assembly_scheduling_service import (
    AssemblySchedulingService,
)
from src.application.services.caller_guard import CallerGuard
from src.application.services.candidacy_registry_service import (
    CandidacyRegistryService,
)
from src.application.services.delegate_election_service import (
    DelegateElectionService,
)
from src.application.services.general_assembly_service import GeneralAssemblyService
from src.application.services.slot_allocation_service import SlotAllocationService
from src.application.services.time_authority_service import TimeAuthorityService

__all__ = [
    "AssemblyLifecycleService",
    "AssemblySchedulingService",
    "CallerGuard",
    "CandidacyRegistryService",
    "DelegateElectionService",
    "GeneralAssemblyService",
    "SlotAllocationService",
    "TimeAuthorityService",
]
