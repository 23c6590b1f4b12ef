"""Infrastructure stubs for development and testing.

This module provides stub implementations of infrastructure ports
for use in development and testing environments.

Available stubs:
- AccessRegistryStub: Single delegate identity, records set_delegate calls
- ProposalRegistryStub: In-memory GA, statute and other proposals
- AssemblyStateRepositoryStub: Keeps the last saved state in memory

WARNING: These stubs are NOT for production use.
Production implementations are in src/infrastructure/adapters/.
"""

from src.infrastructure.stubs.access_registry_stub import AccessRegistryStub
from src.infrastructure.stubs.assembly_state_repository_stub import (
    AssemblyStateRepositoryStub,
)
from src.infrastructure.stubs.proposal_registry_stub import (
    ProposalAction,
    ProposalRegistryStub,
    StubProposal,
)

__all__: list[str] = [
    "AccessRegistryStub",
    "AssemblyStateRepositoryStub",
    "ProposalAction",
    "ProposalRegistryStub",
    "StubProposal",
]
