"""Delegate candidacy round domain models.

A CandidacyRound collects the candidates and their supporting votes for
one delegate election. The registry holds either no round (Empty) or one
open round; concluding the election destroys the open round so that the
next registration starts over.

Rules:
- Candidates are append-only; positions never change within a round
- An identity appears at most once per round
- Voter deduplication is the caller's responsibility
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import Enum

from src.domain.errors.candidacy import AlreadyRegisteredError, UnknownCandidateError


@dataclass(frozen=True, eq=True)
class Candidate:
    """A registered delegate candidate.

    Attributes:
        identity: Member identity of the candidate.
        supporting_vote_count: Votes received so far.
    """

    identity: str
    supporting_vote_count: int = 0

    def with_vote(self) -> Candidate:
        return replace(self, supporting_vote_count=self.supporting_vote_count + 1)


class CandidacyRound:
    """An open candidacy round.

    Attributes:
        total_participants: Number of ballots cast in this round.
    """

    def __init__(
        self,
        candidates: Iterable[Candidate] = (),
        total_participants: int = 0,
    ) -> None:
        self._candidates: list[Candidate] = []
        self._positions: dict[str, int] = {}
        for candidate in candidates:
            self._append(candidate)
        self.total_participants = total_participants

    @property
    def candidates(self) -> tuple[Candidate, ...]:
        return tuple(self._candidates)

    @property
    def candidate_count(self) -> int:
        return len(self._candidates)

    def copy(self) -> CandidacyRound:
        """Return an independent copy of the round."""
        return CandidacyRound(self._candidates, self.total_participants)

    def position_of(self, identity: str) -> int | None:
        """Return the position of ``identity``, or None if unregistered."""
        return self._positions.get(identity)

    def register(self, identity: str) -> int:
        """Append a candidate with zero votes.

        Returns:
            The new candidate's position.

        Raises:
            AlreadyRegisteredError: If the identity is already a candidate.
        """
        existing = self._positions.get(identity)
        if existing is not None:
            raise AlreadyRegisteredError(identity, existing)
        return self._append(Candidate(identity=identity))

    def cast_vote(self, identity: str) -> Candidate:
        """Add one supporting vote for ``identity``.

        Raises:
            UnknownCandidateError: If the identity is not a candidate.
        """
        position = self._positions.get(identity)
        if position is None:
            raise UnknownCandidateError(identity)
        updated = self._candidates[position].with_vote()
        self._candidates[position] = updated
        self.total_participants += 1
        return updated

    def _append(self, candidate: Candidate) -> int:
        if candidate.identity in self._positions:
            raise AlreadyRegisteredError(
                candidate.identity, self._positions[candidate.identity]
            )
        position = len(self._candidates)
        self._candidates.append(candidate)
        self._positions[candidate.identity] = position
        return position


class TallyOutcome(Enum):
    """Outcome of concluding a delegate election round.

    Outcomes:
        QUORUM_NOT_MET: Too few ballots were cast.
        MAJORITY_NOT_MET: No candidate exceeded the required support.
        ELECTED: A single candidate holds the most votes.
        REVOTE_REQUIRED: Two or more candidates tie for the most votes.
    """

    QUORUM_NOT_MET = "quorum_not_met"
    MAJORITY_NOT_MET = "majority_not_met"
    ELECTED = "elected"
    REVOTE_REQUIRED = "revote_required"


@dataclass(frozen=True, eq=True)
class TallyResult:
    """Result of concluding one candidacy round.

    Attributes:
        outcome: Which branch of the tally applied.
        accepted: True when the round produced a winner or a revote.
        needs_revote: True when several candidates tie at the maximum.
        result: Winning position when elected, number of tied candidates
            when a revote is needed, 0 otherwise.
        winner: Identity of the elected candidate, if any.
        tied_candidates: Identities tied at the maximum, in position order.
        participant_count: Ballots cast in the concluded round.
        max_votes: Highest vote count in the concluded round.
    """

    outcome: TallyOutcome
    accepted: bool
    needs_revote: bool
    result: int
    winner: str | None = None
    tied_candidates: tuple[str, ...] = field(default_factory=tuple)
    participant_count: int = 0
    max_votes: int = 0

    @classmethod
    def rejected(
        cls, outcome: TallyOutcome, participant_count: int, max_votes: int
    ) -> TallyResult:
        return cls(
            outcome=outcome,
            accepted=False,
            needs_revote=False,
            result=0,
            participant_count=participant_count,
            max_votes=max_votes,
        )

    def as_tuple(self) -> tuple[bool, bool, int]:
        """Return the ``(accepted, needs_revote, result)`` triple."""
        return (self.accepted, self.needs_revote, self.result)
