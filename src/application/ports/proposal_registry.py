"""Proposal registry port.

The proposal registry owns proposal content and lifecycle. Assembly
governance only reads final results and the few fields it needs to
convene extraordinary assemblies and update the statute.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID


class ProposalRegistryProtocol(Protocol):
    """Protocol for the proposal collaborator."""

    def get_proposal_final_result(self, proposal_id: UUID) -> bool:
        """Return True if the proposal was approved."""
        ...

    def check_action_is_successful_ga(self, proposal_id: UUID) -> bool:
        """Return True if the proposal is an approved request to convene a GA."""
        ...

    def check_action_is_statute(self, proposal_id: UUID) -> bool:
        """Return True if the proposal's action is a statute change."""
        ...

    def get_proposal_proposed_date(self, proposal_id: UUID) -> datetime:
        """Return the assembly date the proposal asks for."""
        ...

    def get_proposal_statute(self, proposal_id: UUID) -> str:
        """Return the statute hash carried by the proposal."""
        ...
