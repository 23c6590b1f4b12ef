"""Domain errors for assembly governance.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from AssemblyError.
"""

from src.domain.errors.assembly import (
    AssemblySchedulingError,
    InvalidAssemblyReferenceError,
    InvalidDurationError,
    NoCapacityError,
    OutOfWindowError,
    SchedulingConflictError,
    ScheduleOrderError,
    SlotRejectionReason,
    UnauthorizedError,
)
from src.domain.errors.candidacy import (
    AlreadyRegisteredError,
    CandidacyError,
    CandidacyRoundNotOpenError,
    RegistrationClosedError,
    UnknownCandidateError,
)

__all__: list[str] = [
    "AlreadyRegisteredError",
    "AssemblySchedulingError",
    "CandidacyError",
    "CandidacyRoundNotOpenError",
    "InvalidAssemblyReferenceError",
    "InvalidDurationError",
    "NoCapacityError",
    "OutOfWindowError",
    "RegistrationClosedError",
    "ScheduleOrderError",
    "SchedulingConflictError",
    "SlotRejectionReason",
    "UnauthorizedError",
    "UnknownCandidateError",
]
