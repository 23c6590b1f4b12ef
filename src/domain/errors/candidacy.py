"""Delegate candidacy and election domain errors.

These exceptions are raised by the candidacy registry and the delegate
election service. Quorum and majority failures are not errors: they are
reported as tally outcomes because the round must still be concluded.
"""

from __future__ import annotations

from datetime import datetime

from src.domain.exceptions import AssemblyError


class CandidacyError(AssemblyError):
    """Base class for candidacy-related errors."""

    pass


class AlreadyRegisteredError(CandidacyError):
    """Raised when an identity is already a candidate in the open round.

    Attributes:
        identity: The duplicate candidate identity.
        position: Position the identity already holds.
    """

    def __init__(self, identity: str, position: int) -> None:
        self.identity = identity
        self.position = position
        super().__init__(
            f"Candidate {identity!r} is already registered at position {position}"
        )


class RegistrationClosedError(CandidacyError):
    """Raised when registration is attempted without an upcoming assembly.

    Registration closes when the assembly hosting the election starts.

    Attributes:
        assembly_start: Start of the election assembly, or None if no
            assembly is scheduled after the current one.
    """

    def __init__(self, assembly_start: datetime | None) -> None:
        self.assembly_start = assembly_start
        if assembly_start is None:
            message = "Candidate registration is closed: no upcoming assembly scheduled"
        else:
            message = (
                "Candidate registration is closed: the election assembly started "
                f"at {assembly_start.isoformat()}"
            )
        super().__init__(message)


class UnknownCandidateError(CandidacyError):
    """Raised when a vote names an identity that is not a candidate."""

    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(f"{identity!r} is not a registered candidate")


class CandidacyRoundNotOpenError(CandidacyError):
    """Raised when a round is concluded while none is open.

    A second conclusion call for the same round lands here; the owning
    process must guard its own phase so this never happens.
    """

    def __init__(self) -> None:
        super().__init__(
            "No candidacy round is open; it was already concluded or never started"
        )
