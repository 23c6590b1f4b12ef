"""Assembly duration validation domain service.

Every General Assembly must have a bounded, positive duration. The upper
bound keeps an assembly from running into a correctly spaced neighbor.
"""

from __future__ import annotations

from datetime import timedelta

from src.domain.errors.assembly import InvalidDurationError


def validate_duration(duration: timedelta, max_duration: timedelta) -> None:
    """Validate an assembly duration is within allowed bounds.

    Args:
        duration: Requested assembly duration.
        max_duration: Longest allowed assembly.

    Raises:
        InvalidDurationError: If duration is zero, negative or above max_duration.
    """
    if duration <= timedelta(0) or duration > max_duration:
        raise InvalidDurationError(duration, max_duration)
