"""Unit tests for CallerGuard authorization checks."""

from __future__ import annotations

import pytest

from src.application.services.caller_guard import CallerGuard
from src.domain.errors.assembly import UnauthorizedError
from src.infrastructure.stubs.access_registry_stub import AccessRegistryStub
from src.infrastructure.stubs.proposal_registry_stub import ProposalRegistryStub
from tests.helpers.assembly import DELEGATE, EPOCH, GATEWAY


@pytest.fixture
def guard(
    access_registry: AccessRegistryStub, proposal_registry: ProposalRegistryStub
) -> CallerGuard:
    return CallerGuard(access_registry, proposal_registry, GATEWAY)


class TestRequireDelegate:
    """Tests for require_delegate."""

    def test_delegate_passes(self, guard: CallerGuard) -> None:
        guard.require_delegate(DELEGATE, "schedule a regular GA")

    def test_other_identity_rejected(self, guard: CallerGuard) -> None:
        with pytest.raises(UnauthorizedError) as exc_info:
            guard.require_delegate("mallory", "schedule a regular GA")

        assert exc_info.value.caller == "mallory"
        assert exc_info.value.action == "schedule a regular GA"

    def test_no_delegate_rejects_everyone(
        self, proposal_registry: ProposalRegistryStub
    ) -> None:
        guard = CallerGuard(AccessRegistryStub(), proposal_registry, GATEWAY)

        with pytest.raises(UnauthorizedError):
            guard.require_delegate(DELEGATE, "schedule a regular GA")


class TestRequireProposalGateway:
    """Tests for require_proposal_gateway."""

    def test_gateway_passes(self, guard: CallerGuard) -> None:
        guard.require_proposal_gateway(GATEWAY, "reserve a proposal slot")

    def test_delegate_is_not_the_gateway(self, guard: CallerGuard) -> None:
        with pytest.raises(UnauthorizedError, match="proposal gateway"):
            guard.require_proposal_gateway(DELEGATE, "reserve a proposal slot")


class TestRequireApprovedProposal:
    """Tests for require_approved_proposal."""

    def test_approved_matching_proposal_passes(
        self, guard: CallerGuard, proposal_registry: ProposalRegistryStub
    ) -> None:
        proposal_id = proposal_registry.add_ga_proposal(EPOCH)

        guard.require_approved_proposal(
            GATEWAY,
            proposal_id,
            "convene",
            proposal_registry.check_action_is_successful_ga,
        )

    def test_rejected_proposal_fails(
        self, guard: CallerGuard, proposal_registry: ProposalRegistryStub
    ) -> None:
        proposal_id = proposal_registry.add_ga_proposal(EPOCH, approved=False)

        with pytest.raises(UnauthorizedError, match="not approved"):
            guard.require_approved_proposal(
                GATEWAY,
                proposal_id,
                "convene",
                proposal_registry.check_action_is_successful_ga,
            )

    def test_action_mismatch_fails(
        self, guard: CallerGuard, proposal_registry: ProposalRegistryStub
    ) -> None:
        proposal_id = proposal_registry.add_other_proposal()

        with pytest.raises(UnauthorizedError, match="does not authorize"):
            guard.require_approved_proposal(
                GATEWAY,
                proposal_id,
                "update the statute",
                proposal_registry.check_action_is_statute,
            )
