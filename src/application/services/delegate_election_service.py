"""Delegate election service - concludes candidacy rounds.

Runs the tally over the open candidacy round, commits a single winner to
the access registry and destroys the round. Every conclusion, whatever
its outcome, leaves the registry without an open round.

Conclusion order:
1. Authorize the caller (proposal gateway)
2. Tally the open round (pure)
3. ELECTED only: set the delegate on the access registry
4. Destroy the round
5. Return the result

If the access registry fails in step 3 nothing has changed and the round
is still open. The owning process must call conclusion once per round;
a second call finds no open round and raises.
"""

from __future__ import annotations

import structlog

from src.application.ports.access_registry import AccessRegistryProtocol
from src.application.ports.assembly_metrics import AssemblyMetricsProtocol
from src.application.ports.time_authority import TimeAuthorityProtocol
from src.application.services.caller_guard import CallerGuard
from src.application.services.candidacy_registry_service import (
    CandidacyRegistryService,
)
from src.config.assembly_config import DEFAULT_ASSEMBLY_CONFIG, AssemblyConfig
from src.domain.errors.candidacy import CandidacyRoundNotOpenError
from src.domain.models.assembly_schedule import AssemblySchedule
from src.domain.models.candidacy_round import TallyOutcome, TallyResult
from src.domain.services.tally_engine import tally

logger = structlog.get_logger(__name__)


class DelegateElectionService:
    """Concludes delegate elections under quorum and majority rules."""

    def __init__(
        self,
        schedule: AssemblySchedule,
        registry: CandidacyRegistryService,
        guard: CallerGuard,
        access_registry: AccessRegistryProtocol,
        time_authority: TimeAuthorityProtocol,
        config: AssemblyConfig = DEFAULT_ASSEMBLY_CONFIG,
        metrics: AssemblyMetricsProtocol | None = None,
    ) -> None:
        self.schedule = schedule
        self._registry = registry
        self._guard = guard
        self._access_registry = access_registry
        self._time = time_authority
        self._config = config
        self._metrics = metrics
        self._log = logger.bind(component="delegate_election")

    def conclude_delegate_voting(
        self,
        caller: str,
        min_participants: int,
        min_yes_votes: int,
    ) -> TallyResult:
        """Conclude the open candidacy round.

        Args:
            caller: Must be the proposal gateway.
            min_participants: Ballot count that must be exceeded.
            min_yes_votes: Vote count the leading candidate must exceed.

        Returns:
            TallyResult; ``as_tuple()`` gives (accepted, needs_revote, result).

        Raises:
            UnauthorizedError: If the caller is not the proposal gateway.
            ValueError: If a threshold is negative.
            CandidacyRoundNotOpenError: If no round is open.
        """
        self._guard.require_proposal_gateway(caller, "conclude delegate voting")
        if min_participants < 0 or min_yes_votes < 0:
            raise ValueError(
                "min_participants and min_yes_votes must be >= 0, got "
                f"{min_participants} and {min_yes_votes}"
            )

        candidacy_round = self._registry.candidacy_round
        if candidacy_round is None:
            self._log.error("conclude_without_open_round", caller=caller)
            raise CandidacyRoundNotOpenError()

        result = tally(candidacy_round, min_participants, min_yes_votes)
        log = self._log.bind(
            outcome=result.outcome.value,
            participant_count=result.participant_count,
            max_votes=result.max_votes,
            candidate_count=candidacy_round.candidate_count,
        )

        if result.outcome is TallyOutcome.ELECTED and result.winner is not None:
            self._access_registry.set_delegate(result.winner)
            log.info("delegate_elected", winner=result.winner, position=result.result)
        elif result.outcome is TallyOutcome.REVOTE_REQUIRED:
            log.info("delegate_revote_required", tied=list(result.tied_candidates))
        else:
            log.info(
                "delegate_election_rejected",
                min_participants=min_participants,
                min_yes_votes=min_yes_votes,
            )

        self._registry.close_round()
        if self._metrics is not None:
            self._metrics.record_tally(result.outcome)
        return result

    def can_vote_for_delegate_now(self) -> bool:
        """Check whether the current assembly's election slot is open now."""
        current = self.schedule.current()
        if current is None or current.delegate_election_time is None:
            return False
        opens = current.delegate_election_time
        return opens <= self._time.now() < opens + self._config.voting_duration
