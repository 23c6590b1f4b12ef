"""Candidacy registry service - delegate candidates and their votes.

Holds the single in-flight candidacy round. The round opens implicitly
with the first registration and is handed over to the election service
exactly once when voting concludes.

Boundary contract:
- Registration is open until the assembly following the cursor starts
- Votes are counted as relayed; the proposal gateway guarantees one
  vote per member, this layer does not deduplicate voters
"""

from __future__ import annotations

import structlog

from src.application.ports.assembly_metrics import AssemblyMetricsProtocol
from src.application.ports.time_authority import TimeAuthorityProtocol
from src.application.services.caller_guard import CallerGuard
from src.domain.errors.candidacy import RegistrationClosedError, UnknownCandidateError
from src.domain.models.assembly_schedule import AssemblySchedule
from src.domain.models.candidacy_round import Candidate, CandidacyRound

logger = structlog.get_logger(__name__)


class CandidacyRegistryService:
    """Tracks candidates and votes for the open election round."""

    def __init__(
        self,
        schedule: AssemblySchedule,
        guard: CallerGuard,
        time_authority: TimeAuthorityProtocol,
        metrics: AssemblyMetricsProtocol | None = None,
        candidacy_round: CandidacyRound | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            schedule: Schedule used to decide whether registration is open.
            guard: Authorization checks.
            time_authority: Governance clock.
            metrics: Optional metrics collector.
            candidacy_round: Round restored from persisted state, if any.
        """
        self.schedule = schedule
        self._guard = guard
        self._time = time_authority
        self._metrics = metrics
        self._round = candidacy_round
        self._log = logger.bind(component="candidacy_registry")

    @property
    def candidacy_round(self) -> CandidacyRound | None:
        """The open round, or None when no round is open."""
        return self._round

    @property
    def has_open_round(self) -> bool:
        return self._round is not None

    @property
    def candidate_count(self) -> int:
        return self._round.candidate_count if self._round is not None else 0

    def candidates(self) -> tuple[Candidate, ...]:
        return self._round.candidates if self._round is not None else ()

    def register_candidate(self, caller: str, identity: str) -> int:
        """Register ``identity`` as a delegate candidate.

        Args:
            caller: Must be the proposal gateway.
            identity: Member identity of the candidate.

        Returns:
            The candidate's position in the round.

        Raises:
            UnauthorizedError: If the caller is not the proposal gateway.
            RegistrationClosedError: If no upcoming assembly exists or it
                has already started.
            AlreadyRegisteredError: If the identity is already a candidate.
        """
        self._guard.require_proposal_gateway(caller, "register a candidate")

        upcoming = self.schedule.upcoming()
        if upcoming is None or upcoming.has_started(self._time.now()):
            start = upcoming.start_time if upcoming is not None else None
            self._log.info("candidate_registration_closed", identity=identity)
            raise RegistrationClosedError(start)

        opened = self._round is None
        candidacy_round = self._round if self._round is not None else CandidacyRound()
        position = candidacy_round.register(identity)
        self._round = candidacy_round

        self._log.info(
            "candidate_registered",
            identity=identity,
            position=position,
            round_opened=opened,
        )
        if self._metrics is not None:
            self._metrics.record_candidate_registered()
        return position

    def cast_delegate_vote(self, caller: str, identity: str) -> int:
        """Add one supporting vote for candidate ``identity``.

        Args:
            caller: Must be the proposal gateway.
            identity: Candidate receiving the vote.

        Returns:
            The candidate's updated vote count.

        Raises:
            UnauthorizedError: If the caller is not the proposal gateway.
            UnknownCandidateError: If no round is open or the identity is
                not a candidate.
        """
        self._guard.require_proposal_gateway(caller, "cast a delegate vote")
        if self._round is None:
            raise UnknownCandidateError(identity)

        candidate = self._round.cast_vote(identity)
        self._log.debug(
            "delegate_vote_cast",
            identity=identity,
            supporting_vote_count=candidate.supporting_vote_count,
            total_participants=self._round.total_participants,
        )
        if self._metrics is not None:
            self._metrics.record_vote_cast()
        return candidate.supporting_vote_count

    def close_round(self) -> None:
        """Destroy the open round so the next registration starts fresh."""
        self._round = None

    def restore_round(self, candidacy_round: CandidacyRound | None) -> None:
        """Reinstate a previously copied round (or no round)."""
        self._round = candidacy_round
