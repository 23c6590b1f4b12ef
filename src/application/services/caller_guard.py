"""Caller Guard service - authorization checks for mutating entry points.

Every mutating entry point names its caller explicitly and runs one of
these checks before looking at any other precondition. Reads never go
through the guard.

Authorization kinds:
1. DELEGATE - the caller currently holds the delegate role
2. PROPOSAL GATEWAY - the caller is the configured proposal process
3. APPROVED PROPOSAL - the referenced proposal passed with the right action
"""

from __future__ import annotations

from collections.abc import Callable
from uuid import UUID

import structlog

from src.application.ports.access_registry import AccessRegistryProtocol
from src.application.ports.proposal_registry import ProposalRegistryProtocol
from src.domain.errors.assembly import UnauthorizedError

log = structlog.get_logger()


class CallerGuard:
    """Checks caller identities and proposal provenance.

    Example:
        >>> guard = CallerGuard(access_registry, proposal_registry, "proposal-gateway")
        >>> guard.require_delegate("alice", "schedule a regular GA")
        >>> guard.require_proposal_gateway("proposal-gateway", "reserve a slot")
    """

    def __init__(
        self,
        access_registry: AccessRegistryProtocol,
        proposal_registry: ProposalRegistryProtocol,
        proposal_gateway_identity: str,
    ) -> None:
        """Initialize the guard.

        Args:
            access_registry: Source of truth for the delegate role.
            proposal_registry: Source of truth for proposal results.
            proposal_gateway_identity: Identity of the proposal process.
        """
        self._access_registry = access_registry
        self._proposal_registry = proposal_registry
        self._proposal_gateway_identity = proposal_gateway_identity
        self._log = log.bind(service="caller_guard")

    def require_delegate(self, caller: str, action: str) -> None:
        """Require the caller to be the current delegate.

        Raises:
            UnauthorizedError: If the caller is not the delegate.
        """
        if not self._access_registry.check_is_delegate(caller):
            self._log.warning("caller_not_delegate", caller=caller, action=action)
            raise UnauthorizedError(caller, action, "caller is not the delegate")

    def require_proposal_gateway(self, caller: str, action: str) -> None:
        """Require the caller to be the proposal gateway.

        Raises:
            UnauthorizedError: If the caller is any other identity.
        """
        if caller != self._proposal_gateway_identity:
            self._log.warning(
                "caller_not_proposal_gateway", caller=caller, action=action
            )
            raise UnauthorizedError(
                caller, action, "only the proposal gateway may do this"
            )

    def require_approved_proposal(
        self,
        caller: str,
        proposal_id: UUID,
        action: str,
        action_check: Callable[[UUID], bool],
    ) -> None:
        """Require an approved proposal whose action matches.

        Args:
            caller: Identity relaying the proposal.
            proposal_id: The proposal that authorizes the action.
            action: Name of the attempted action.
            action_check: Proposal registry check for the expected action.

        Raises:
            UnauthorizedError: If the proposal was not approved or its
                action does not match.
        """
        if not self._proposal_registry.get_proposal_final_result(proposal_id):
            self._log.warning(
                "proposal_not_approved",
                caller=caller,
                proposal_id=str(proposal_id),
                action=action,
            )
            raise UnauthorizedError(
                caller, action, f"proposal {proposal_id} was not approved"
            )
        if not action_check(proposal_id):
            self._log.warning(
                "proposal_action_mismatch",
                caller=caller,
                proposal_id=str(proposal_id),
                action=action,
            )
            raise UnauthorizedError(
                caller, action, f"proposal {proposal_id} does not authorize this"
            )

    @property
    def proposal_registry(self) -> ProposalRegistryProtocol:
        return self._proposal_registry

    @property
    def access_registry(self) -> AccessRegistryProtocol:
        return self._access_registry
