"""Delegate election tally domain service.

Concludes one candidacy round by applying the quorum and majority rules
and detecting ties at the maximum vote count. The tally is a pure
function of the round; destroying the round and committing the winner
belong to the application layer.

Algorithm:
1. Scan all candidates, tracking the maximum vote count and every
   position that reaches it
2. participants <= min_participants -> rejected (quorum not met)
3. max votes <= min_yes_votes -> rejected (majority not met)
4. exactly one position at the maximum -> elected, result is its position
5. otherwise -> revote, result is the number of tied candidates
"""

from __future__ import annotations

from src.domain.models.candidacy_round import CandidacyRound, TallyOutcome, TallyResult


def tally(
    candidacy_round: CandidacyRound,
    min_participants: int,
    min_yes_votes: int,
) -> TallyResult:
    """Tally a candidacy round.

    Args:
        candidacy_round: The round to tally (not modified).
        min_participants: Ballot count that must be exceeded.
        min_yes_votes: Vote count the leader must exceed.

    Returns:
        TallyResult describing the applied branch.
    """
    max_votes = 0
    tied_positions: list[int] = []
    candidates = candidacy_round.candidates
    for position, candidate in enumerate(candidates):
        if candidate.supporting_vote_count > max_votes:
            max_votes = candidate.supporting_vote_count
            tied_positions = [position]
        elif candidate.supporting_vote_count == max_votes:
            tied_positions.append(position)

    participants = candidacy_round.total_participants
    if participants <= min_participants:
        return TallyResult.rejected(
            TallyOutcome.QUORUM_NOT_MET, participants, max_votes
        )
    if max_votes <= min_yes_votes:
        return TallyResult.rejected(
            TallyOutcome.MAJORITY_NOT_MET, participants, max_votes
        )

    tied = tuple(candidates[position].identity for position in tied_positions)
    if len(tied_positions) == 1:
        return TallyResult(
            outcome=TallyOutcome.ELECTED,
            accepted=True,
            needs_revote=False,
            result=tied_positions[0],
            winner=tied[0],
            tied_candidates=tied,
            participant_count=participants,
            max_votes=max_votes,
        )
    return TallyResult(
        outcome=TallyOutcome.REVOTE_REQUIRED,
        accepted=True,
        needs_revote=True,
        result=len(tied_positions),
        tied_candidates=tied,
        participant_count=participants,
        max_votes=max_votes,
    )
