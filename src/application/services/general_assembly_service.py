"""General Assembly service - the entry points of assembly governance.

Composes the scheduling, slot, candidacy, election and lifecycle
services around one shared schedule and exposes them to the hosting
process. When a state repository is wired, the full state is saved
after every mutation that succeeded; rejected operations save nothing.
If the save itself fails, the in-memory state is rolled back to what it
was before the call and the error propagates, so memory never runs
ahead of the stored state.

All calls are expected to come through one serialization point (a
single logical writer), so no locking happens here.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import NamedTuple
from uuid import UUID

import structlog

from src.application.ports.access_registry import AccessRegistryProtocol
from src.application.ports.assembly_metrics import AssemblyMetricsProtocol
from src.application.ports.assembly_state_repository import (
    AssemblyStateRepositoryProtocol,
)
from src.application.ports.proposal_registry import ProposalRegistryProtocol
from src.application.ports.time_authority import TimeAuthorityProtocol
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
from src.application.services.slot_allocation_service import SlotAllocationService
from src.config.assembly_config import DEFAULT_ASSEMBLY_CONFIG, AssemblyConfig
from src.domain.models.assembly_schedule import AssemblySchedule
from src.domain.models.assembly_state import AssemblyState
from src.domain.models.candidacy_round import Candidate, CandidacyRound, TallyResult
from src.domain.models.general_assembly import AssemblyWindow, GeneralAssembly

logger = structlog.get_logger(__name__)


class _Checkpoint(NamedTuple):
    """In-memory state captured before a mutation."""

    schedule: AssemblySchedule
    candidacy_round: CandidacyRound | None


class GeneralAssemblyService:
    """Entry points for scheduling assemblies, booking slots and electing delegates.

    Example:
        >>> service = GeneralAssemblyService(
        ...     access_registry=access, proposal_registry=proposals,
        ...     time_authority=clock,
        ... )
        >>> index = service.schedule_regular_ga("delegate", start, timedelta(hours=4))
        >>> service.reserve_proposal_slot("proposal-gateway", index)
    """

    def __init__(
        self,
        access_registry: AccessRegistryProtocol,
        proposal_registry: ProposalRegistryProtocol,
        time_authority: TimeAuthorityProtocol,
        config: AssemblyConfig = DEFAULT_ASSEMBLY_CONFIG,
        repository: AssemblyStateRepositoryProtocol | None = None,
        metrics: AssemblyMetricsProtocol | None = None,
    ) -> None:
        """Initialize the service, restoring saved state if available.

        Args:
            access_registry: Delegate lookup and installation.
            proposal_registry: Approved proposal facts.
            time_authority: Governance clock.
            config: Scheduling windows and slot lengths.
            repository: Optional state persistence.
            metrics: Optional metrics collector.
        """
        self._repository = repository
        self._log = logger.bind(component="general_assembly")

        state = repository.load() if repository is not None else None
        if state is None:
            state = AssemblyState(schedule=AssemblySchedule())
        else:
            self._log.info(
                "assembly_state_restored",
                total_scheduled=state.schedule.total_scheduled,
                cursor=state.schedule.cursor,
                round_open=state.candidacy_round is not None,
            )
        self._schedule = state.schedule

        guard = CallerGuard(
            access_registry, proposal_registry, config.proposal_gateway_identity
        )
        self._scheduling = AssemblySchedulingService(
            self._schedule, guard, time_authority, config, metrics
        )
        self._slots = SlotAllocationService(
            self._schedule, guard, time_authority, config, metrics
        )
        self._candidacy = CandidacyRegistryService(
            self._schedule, guard, time_authority, metrics, state.candidacy_round
        )
        self._election = DelegateElectionService(
            self._schedule,
            self._candidacy,
            guard,
            access_registry,
            time_authority,
            config,
            metrics,
        )
        self._lifecycle = AssemblyLifecycleService(
            self._schedule, guard, time_authority, metrics
        )

    # -------------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------------

    def schedule_regular_ga(
        self, caller: str, start_time: datetime, duration: timedelta
    ) -> int:
        checkpoint = self._checkpoint()
        index = self._scheduling.schedule_regular_ga(caller, start_time, duration)
        self._save(checkpoint)
        return index

    def schedule_extraordinary_ga(self, caller: str, proposal_id: UUID) -> int:
        checkpoint = self._checkpoint()
        index = self._scheduling.schedule_extraordinary_ga(caller, proposal_id)
        self._save(checkpoint)
        return index

    def can_schedule_at(self, start_time: datetime, is_extraordinary: bool) -> bool:
        return self._scheduling.can_schedule_at(start_time, is_extraordinary)

    # -------------------------------------------------------------------------
    # Voting slots
    # -------------------------------------------------------------------------

    def reserve_proposal_slot(self, caller: str, ga_index: int) -> datetime:
        checkpoint = self._checkpoint()
        slot_start = self._slots.reserve_proposal_slot(caller, ga_index)
        self._save(checkpoint)
        return slot_start

    def reserve_delegate_election_slot(self, caller: str, ga_index: int) -> datetime:
        checkpoint = self._checkpoint()
        slot_start = self._slots.reserve_delegate_election_slot(caller, ga_index)
        self._save(checkpoint)
        return slot_start

    # -------------------------------------------------------------------------
    # Candidacy and election
    # -------------------------------------------------------------------------

    def register_candidate(self, caller: str, identity: str) -> int:
        checkpoint = self._checkpoint()
        position = self._candidacy.register_candidate(caller, identity)
        self._save(checkpoint)
        return position

    def cast_delegate_vote(self, caller: str, identity: str) -> int:
        checkpoint = self._checkpoint()
        count = self._candidacy.cast_delegate_vote(caller, identity)
        self._save(checkpoint)
        return count

    def conclude_delegate_voting(
        self, caller: str, min_participants: int, min_yes_votes: int
    ) -> TallyResult:
        """Conclude the open round and persist the outcome.

        If the save fails after a delegate was installed, the round is
        reopened in memory to match the stored state. Concluding it again
        reruns the same tally and installs the same winner.
        """
        checkpoint = self._checkpoint()
        result = self._election.conclude_delegate_voting(
            caller, min_participants, min_yes_votes
        )
        self._save(checkpoint)
        return result

    def can_vote_for_delegate_now(self) -> bool:
        return self._election.can_vote_for_delegate_now()

    def candidates(self) -> tuple[Candidate, ...]:
        return self._candidacy.candidates()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def advance_if_elapsed(self, now: datetime | None = None) -> bool:
        checkpoint = self._checkpoint()
        advanced = self._lifecycle.advance_if_elapsed(now)
        if advanced:
            self._save(checkpoint)
        return advanced

    def update_statute(self, caller: str, proposal_id: UUID) -> str:
        checkpoint = self._checkpoint()
        statute_hash = self._lifecycle.update_statute(caller, proposal_id)
        self._save(checkpoint)
        return statute_hash

    def get_ga_window(self, index: int) -> AssemblyWindow:
        return self._lifecycle.get_ga_window(index)

    def get_ga(self, index: int) -> GeneralAssembly:
        return self._schedule.get(index)

    def is_during_current_ga(self) -> bool:
        return self._lifecycle.is_during_current_ga()

    @property
    def total_scheduled(self) -> int:
        return self._schedule.total_scheduled

    @property
    def cursor(self) -> int | None:
        return self._schedule.cursor

    @property
    def current_statute_hash(self) -> str | None:
        return self._schedule.current_statute_hash

    @property
    def state(self) -> AssemblyState:
        """Snapshot handle of the live state (shares the schedule object)."""
        return AssemblyState(
            schedule=self._schedule,
            candidacy_round=self._candidacy.candidacy_round,
        )

    def _checkpoint(self) -> _Checkpoint | None:
        if self._repository is None:
            return None
        candidacy_round = self._candidacy.candidacy_round
        return _Checkpoint(
            schedule=self._schedule.copy(),
            candidacy_round=(
                candidacy_round.copy() if candidacy_round is not None else None
            ),
        )

    def _save(self, checkpoint: _Checkpoint | None) -> None:
        """Persist the current state, rolling back to ``checkpoint`` on failure."""
        if self._repository is None or checkpoint is None:
            return
        try:
            self._repository.save(self.state)
        except Exception as exc:
            self._schedule.restore(checkpoint.schedule)
            self._candidacy.restore_round(checkpoint.candidacy_round)
            self._log.error(
                "assembly_state_save_failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise
