"""Time Authority Protocol - interface for the governance clock.

Every scheduling, slot and cursor decision depends on "now". Services
MUST read it from an injected TimeAuthorityProtocol instead of calling
datetime.now() so tests can freeze and advance time deterministically.

For production:
    Use TimeAuthorityService from src/application/services/

For testing:
    Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for the governance clock."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time.

        Returns:
            Current timezone-aware datetime in UTC.
        """
        ...
