"""
Pytest configuration and shared fixtures for assembly governance tests.

Testing Standards:
- Time-dependent tests use the `fake_time_authority` fixture
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

import pytest

from src.application.services.general_assembly_service import GeneralAssemblyService
from src.config.assembly_config import TEST_ASSEMBLY_CONFIG, AssemblyConfig
from src.infrastructure.stubs.access_registry_stub import AccessRegistryStub
from src.infrastructure.stubs.assembly_state_repository_stub import (
    AssemblyStateRepositoryStub,
)
from src.infrastructure.stubs.proposal_registry_stub import ProposalRegistryStub
from tests.helpers.assembly import DELEGATE, EPOCH
from tests.helpers.fake_time_authority import FakeTimeAuthority


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Governance clock frozen at the test epoch."""
    return FakeTimeAuthority(frozen_at=EPOCH)


@pytest.fixture
def assembly_config() -> AssemblyConfig:
    return TEST_ASSEMBLY_CONFIG


@pytest.fixture
def access_registry() -> AccessRegistryStub:
    """Access registry with DELEGATE holding the delegate role."""
    return AccessRegistryStub(delegate=DELEGATE)


@pytest.fixture
def proposal_registry() -> ProposalRegistryStub:
    return ProposalRegistryStub()


@pytest.fixture
def state_repository() -> AssemblyStateRepositoryStub:
    return AssemblyStateRepositoryStub()


@pytest.fixture
def service(
    access_registry: AccessRegistryStub,
    proposal_registry: ProposalRegistryStub,
    fake_time_authority: FakeTimeAuthority,
    assembly_config: AssemblyConfig,
    state_repository: AssemblyStateRepositoryStub,
) -> GeneralAssemblyService:
    """GeneralAssemblyService wired to stubs and the fake clock."""
    return GeneralAssemblyService(
        access_registry=access_registry,
        proposal_registry=proposal_registry,
        time_authority=fake_time_authority,
        config=assembly_config,
        repository=state_repository,
    )
