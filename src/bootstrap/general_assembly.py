"""Bootstrap wiring for General Assembly governance.

Builds the GeneralAssemblyService from environment configuration. The
access and proposal registries default to in-memory stubs until the
hosting process installs its own adapters with the set_* functions;
state is kept in a JSON file when ASSEMBLY_STATE_PATH is set.
"""

from __future__ import annotations

import structlog

from src.application.ports.access_registry import AccessRegistryProtocol
from src.application.ports.assembly_state_repository import (
    AssemblyStateRepositoryProtocol,
)
from src.application.ports.proposal_registry import ProposalRegistryProtocol
from src.application.ports.time_authority import TimeAuthorityProtocol
from src.application.services.general_assembly_service import (
    GeneralAssemblyService,
)
from src.application.services.time_authority_service import TimeAuthorityService
from src.bootstrap.metrics import get_assembly_metrics
from src.config.assembly_config import AssemblyConfig
from src.infrastructure.adapters.persistence import JsonFileAssemblyStateRepository
from src.infrastructure.stubs.access_registry_stub import AccessRegistryStub
from src.infrastructure.stubs.proposal_registry_stub import ProposalRegistryStub

logger = structlog.get_logger(__name__)

_config: AssemblyConfig | None = None
_access_registry: AccessRegistryProtocol | None = None
_proposal_registry: ProposalRegistryProtocol | None = None
_time_authority: TimeAuthorityProtocol | None = None
_general_assembly_service: GeneralAssemblyService | None = None


def get_assembly_config() -> AssemblyConfig:
    """Get assembly configuration (loaded from the environment once)."""
    global _config
    if _config is None:
        _config = AssemblyConfig.from_environment()
    return _config


def get_access_registry() -> AccessRegistryProtocol:
    """Get access registry instance."""
    global _access_registry
    if _access_registry is None:
        _access_registry = AccessRegistryStub()
    return _access_registry


def get_proposal_registry() -> ProposalRegistryProtocol:
    """Get proposal registry instance."""
    global _proposal_registry
    if _proposal_registry is None:
        _proposal_registry = ProposalRegistryStub()
    return _proposal_registry


def get_time_authority() -> TimeAuthorityProtocol:
    """Get governance clock instance."""
    global _time_authority
    if _time_authority is None:
        _time_authority = TimeAuthorityService()
    return _time_authority


def get_state_repository() -> AssemblyStateRepositoryProtocol | None:
    """Get the state repository, or None when state stays in memory."""
    state_path = get_assembly_config().state_path
    if state_path is None:
        return None
    return JsonFileAssemblyStateRepository(state_path)


def get_general_assembly_service() -> GeneralAssemblyService:
    """Get General Assembly service instance."""
    global _general_assembly_service
    if _general_assembly_service is None:
        config = get_assembly_config()
        _general_assembly_service = GeneralAssemblyService(
            access_registry=get_access_registry(),
            proposal_registry=get_proposal_registry(),
            time_authority=get_time_authority(),
            config=config,
            repository=get_state_repository(),
            metrics=get_assembly_metrics(),
        )
        logger.info(
            "general_assembly_service_wired",
            persistent=config.state_path is not None,
            proposal_gateway=config.proposal_gateway_identity,
        )
    return _general_assembly_service


def set_assembly_config(config: AssemblyConfig) -> None:
    """Set custom assembly configuration (testing/override)."""
    global _config
    _config = config


def set_access_registry(registry: AccessRegistryProtocol) -> None:
    """Set custom access registry (production adapter or testing)."""
    global _access_registry
    _access_registry = registry


def set_proposal_registry(registry: ProposalRegistryProtocol) -> None:
    """Set custom proposal registry (production adapter or testing)."""
    global _proposal_registry
    _proposal_registry = registry


def set_time_authority(time_authority: TimeAuthorityProtocol) -> None:
    """Set custom governance clock (testing/override)."""
    global _time_authority
    _time_authority = time_authority


def reset_general_assembly() -> None:
    """Reset all General Assembly singletons (testing cleanup)."""
    global _config
    global _access_registry
    global _proposal_registry
    global _time_authority
    global _general_assembly_service
    _config = None
    _access_registry = None
    _proposal_registry = None
    _time_authority = None
    _general_assembly_service = None
