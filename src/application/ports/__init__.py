"""Application ports - Abstract interfaces for infrastructure adapters.

This module defines the contracts that infrastructure adapters must implement.
Ports enable dependency inversion and make the application layer testable.

Available ports:
- AccessRegistryProtocol: delegate lookup and installation
- ProposalRegistryProtocol: approved proposal facts
- TimeAuthorityProtocol: governance clock
- AssemblyStateRepositoryProtocol: state persistence
- AssemblyMetricsProtocol: operational counters
"""

from src.application.ports.access_registry import AccessRegistryProtocol
from src.application.ports.assembly_metrics import AssemblyMetricsProtocol
from src.application.ports.assembly_state_repository import (
    AssemblyStateRepositoryProtocol,
)
from src.application.ports.proposal_registry import ProposalRegistryProtocol
from src.application.ports.time_authority import TimeAuthorityProtocol

__all__: list[str] = [
    "AccessRegistryProtocol",
    "AssemblyMetricsProtocol",
    "AssemblyStateRepositoryProtocol",
    "ProposalRegistryProtocol",
    "TimeAuthorityProtocol",
]
