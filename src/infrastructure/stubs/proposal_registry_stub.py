"""In-memory stub implementation of ProposalRegistryProtocol.

This module provides an in-memory implementation for testing and local
development. Not intended for production use.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4


class ProposalAction(Enum):
    """What a stubbed proposal asks for."""

    GENERAL_ASSEMBLY = "general_assembly"
    STATUTE = "statute"
    OTHER = "other"


@dataclass(frozen=True)
class StubProposal:
    """A proposal as seen by assembly governance."""

    proposal_id: UUID
    action: ProposalAction
    approved: bool
    proposed_date: datetime | None = None
    statute_hash: str | None = None


class ProposalRegistryStub:
    """In-memory implementation of ProposalRegistryProtocol.

    Example:
        >>> stub = ProposalRegistryStub()
        >>> proposal_id = stub.add_ga_proposal(proposed_date=some_date)
        >>> stub.check_action_is_successful_ga(proposal_id)
        True
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._proposals: dict[UUID, StubProposal] = {}

    def add_ga_proposal(
        self,
        proposed_date: datetime,
        approved: bool = True,
        proposal_id: UUID | None = None,
    ) -> UUID:
        """Add a proposal requesting an extraordinary assembly."""
        return self._add(
            StubProposal(
                proposal_id=proposal_id or uuid4(),
                action=ProposalAction.GENERAL_ASSEMBLY,
                approved=approved,
                proposed_date=proposed_date,
            )
        )

    def add_statute_proposal(
        self,
        statute_hash: str,
        approved: bool = True,
        proposal_id: UUID | None = None,
    ) -> UUID:
        """Add a proposal changing the statute."""
        return self._add(
            StubProposal(
                proposal_id=proposal_id or uuid4(),
                action=ProposalAction.STATUTE,
                approved=approved,
                statute_hash=statute_hash,
            )
        )

    def add_other_proposal(self, approved: bool = True) -> UUID:
        """Add a proposal whose action is neither a GA nor a statute."""
        return self._add(
            StubProposal(
                proposal_id=uuid4(), action=ProposalAction.OTHER, approved=approved
            )
        )

    def get_proposal_final_result(self, proposal_id: UUID) -> bool:
        proposal = self._proposals.get(proposal_id)
        return proposal is not None and proposal.approved

    def check_action_is_successful_ga(self, proposal_id: UUID) -> bool:
        proposal = self._proposals.get(proposal_id)
        return (
            proposal is not None
            and proposal.approved
            and proposal.action is ProposalAction.GENERAL_ASSEMBLY
        )

    def check_action_is_statute(self, proposal_id: UUID) -> bool:
        proposal = self._proposals.get(proposal_id)
        return proposal is not None and proposal.action is ProposalAction.STATUTE

    def get_proposal_proposed_date(self, proposal_id: UUID) -> datetime:
        """Return the proposed assembly date.

        Raises:
            KeyError: If the proposal is unknown or carries no date.
        """
        proposed_date = self._proposals[proposal_id].proposed_date
        if proposed_date is None:
            raise KeyError(f"proposal {proposal_id} has no proposed date")
        return proposed_date

    def get_proposal_statute(self, proposal_id: UUID) -> str:
        """Return the statute hash carried by the proposal.

        Raises:
            KeyError: If the proposal is unknown or carries no statute.
        """
        statute_hash = self._proposals[proposal_id].statute_hash
        if statute_hash is None:
            raise KeyError(f"proposal {proposal_id} carries no statute")
        return statute_hash

    def _add(self, proposal: StubProposal) -> UUID:
        self._proposals[proposal.proposal_id] = proposal
        return proposal.proposal_id
