"""General Assembly scheduling and slot domain errors.

This module defines the exceptions raised while scheduling General
Assemblies, booking voting slots inside them and reading their windows.
All errors inherit from AssemblyError and carry the values that caused
the rejection so callers can decide whether to resubmit.

Rules:
- A raised error means no state was changed
- There is no internal retry; the governance process decides what to do next
"""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum

from src.domain.exceptions import AssemblyError


class AssemblySchedulingError(AssemblyError):
    """Base class for General Assembly scheduling errors."""

    pass


class UnauthorizedError(AssemblyError):
    """Raised when the caller may not perform the requested action.

    Attributes:
        caller: Identity that attempted the action.
        action: Name of the attempted action.
    """

    def __init__(self, caller: str | None, action: str, reason: str = "") -> None:
        """Initialize UnauthorizedError.

        Args:
            caller: Identity that attempted the action.
            action: Name of the attempted action.
            reason: Optional explanation appended to the message.
        """
        self.caller = caller
        self.action = action
        self.reason = reason
        message = f"Caller {caller!r} is not authorized to {action}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class OutOfWindowError(AssemblySchedulingError):
    """Raised when a requested time lies outside the allowed window.

    Covers the lookahead limit, the closest-future floor and operations
    against an assembly whose window has already elapsed.

    Attributes:
        requested_time: The rejected time.
        earliest: Earliest acceptable time (exclusive), if applicable.
        latest: Latest acceptable time (inclusive), if applicable.
    """

    def __init__(
        self,
        requested_time: datetime,
        earliest: datetime | None = None,
        latest: datetime | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize OutOfWindowError.

        Args:
            requested_time: The rejected time.
            earliest: Exclusive lower bound that was violated.
            latest: Inclusive upper bound that was violated.
            message: Optional override for the default message.
        """
        self.requested_time = requested_time
        self.earliest = earliest
        self.latest = latest
        if message is None:
            message = (
                f"Requested time {requested_time.isoformat()} is outside the "
                f"schedulable window (after {_fmt(earliest)}, up to {_fmt(latest)})"
            )
        super().__init__(message)


class SchedulingConflictError(AssemblySchedulingError):
    """Raised when a requested time is too close to a scheduled assembly.

    Attributes:
        requested_time: The rejected time.
        neighbor_index: Schedule index of the conflicting assembly.
        gap: Actual gap between the requested time and the neighbor.
        required_gap: Gap that must be exceeded.
    """

    def __init__(
        self,
        requested_time: datetime,
        neighbor_index: int,
        gap: timedelta,
        required_gap: timedelta,
    ) -> None:
        """Initialize SchedulingConflictError.

        Args:
            requested_time: The rejected time.
            neighbor_index: Schedule index of the conflicting assembly.
            gap: Actual gap to the neighbor.
            required_gap: Gap that must be strictly exceeded.
        """
        self.requested_time = requested_time
        self.neighbor_index = neighbor_index
        self.gap = gap
        self.required_gap = required_gap
        super().__init__(
            f"Requested time {requested_time.isoformat()} is {gap} from assembly "
            f"#{neighbor_index}; more than {required_gap} is required"
        )


class InvalidDurationError(AssemblySchedulingError):
    """Raised when an assembly duration is not positive or exceeds the maximum."""

    def __init__(self, duration: timedelta, max_duration: timedelta) -> None:
        self.duration = duration
        self.max_duration = max_duration
        super().__init__(
            f"Assembly duration {duration} must be positive and at most {max_duration}"
        )


class InvalidAssemblyReferenceError(AssemblyError):
    """Raised when an assembly index does not refer to a scheduled assembly.

    Attributes:
        index: The requested index.
        total_scheduled: Number of scheduled assemblies.
    """

    def __init__(self, index: int, total_scheduled: int) -> None:
        self.index = index
        self.total_scheduled = total_scheduled
        super().__init__(
            f"Assembly index {index} is out of range "
            f"({total_scheduled} assemblies scheduled)"
        )


class ScheduleOrderError(AssemblyError):
    """Raised when a record sequence would break strict start-time ordering."""

    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(
            f"Assembly at position {position} does not start strictly after "
            "its predecessor"
        )


class SlotRejectionReason(Enum):
    """Why a voting slot could not be reserved."""

    GA_STARTED = "ga_started"
    FULLY_BOOKED = "fully_booked"


class NoCapacityError(AssemblyError):
    """Raised when no voting slot is available in an assembly.

    The caller must not retry against the same assembly: a started
    assembly never reopens and a booked-out watermark never moves back.

    Attributes:
        ga_index: Index of the targeted assembly.
        reason: GA_STARTED or FULLY_BOOKED.
    """

    def __init__(self, ga_index: int, reason: SlotRejectionReason) -> None:
        self.ga_index = ga_index
        self.reason = reason
        if reason is SlotRejectionReason.GA_STARTED:
            detail = "has already started"
        else:
            detail = "is fully booked"
        super().__init__(f"No voting slot available: assembly #{ga_index} {detail}")


def _fmt(value: datetime | None) -> str:
    return value.isoformat() if value is not None else "-"
