"""Time Authority Service - wall clock for production wiring.

Production implementation of TimeAuthorityProtocol. Always returns
timezone-aware UTC datetimes; tests inject FakeTimeAuthority instead.
"""

from datetime import datetime, timezone

from src.application.ports.time_authority import TimeAuthorityProtocol


class TimeAuthorityService(TimeAuthorityProtocol):
    """System clock time authority.

    Example:
        >>> service = TimeAuthorityService()
        >>> service.now().tzinfo is timezone.utc
        True
    """

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
