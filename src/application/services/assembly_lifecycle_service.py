"""Assembly lifecycle service - cursor advancement and statute updates.

The cursor marks the current (or most recently concluded) assembly. It
moves forward when the next assembly's window begins, one assembly per
call, and the new current assembly inherits the statute hash in force.
Several assemblies that elapsed since the last call need as many calls.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

import structlog

from src.application.ports.assembly_metrics import AssemblyMetricsProtocol
from src.application.ports.time_authority import TimeAuthorityProtocol
from src.application.services.caller_guard import CallerGuard
from src.domain.models.assembly_schedule import AssemblySchedule
from src.domain.models.general_assembly import AssemblyWindow

logger = structlog.get_logger(__name__)


class AssemblyLifecycleService:
    """Advances the current assembly and keeps the statute hash."""

    def __init__(
        self,
        schedule: AssemblySchedule,
        guard: CallerGuard,
        time_authority: TimeAuthorityProtocol,
        metrics: AssemblyMetricsProtocol | None = None,
    ) -> None:
        self.schedule = schedule
        self._guard = guard
        self._time = time_authority
        self._metrics = metrics
        self._log = logger.bind(component="assembly_lifecycle")

    def advance_if_elapsed(self, now: datetime | None = None) -> bool:
        """Advance the cursor if the next assembly has begun.

        Unauthenticated: it only reacts to observable time, so a caller
        may evaluate at an earlier instant but never ahead of the clock.

        Args:
            now: Time to evaluate at; defaults to the time authority.

        Returns:
            True if the cursor moved by one assembly.

        Raises:
            ValueError: If now is later than the time authority's clock.
        """
        clock_now = self._time.now()
        if now is None:
            now = clock_now
        elif now > clock_now:
            self._log.warning(
                "advance_rejected_future_time",
                requested=now.isoformat(),
                clock=clock_now.isoformat(),
            )
            raise ValueError(
                f"cannot advance at {now.isoformat()}, the clock reads "
                f"{clock_now.isoformat()}"
            )
        upcoming = self.schedule.upcoming()
        if upcoming is None or not upcoming.has_started(now):
            return False

        current = self.schedule.advance_cursor()
        cursor = self.schedule.cursor
        self._log.info(
            "current_ga_advanced",
            cursor=cursor,
            start_time=current.start_time.isoformat(),
            statute_hash=current.statute_hash,
        )
        if self._metrics is not None and cursor is not None:
            self._metrics.set_cursor(cursor)
        return True

    def update_statute(self, caller: str, proposal_id: UUID) -> str:
        """Install the statute carried by an approved statute proposal.

        The new hash is copied into each assembly as it becomes current.

        Args:
            caller: Identity relaying the proposal.
            proposal_id: Approved statute proposal.

        Returns:
            The statute hash now in force.

        Raises:
            UnauthorizedError: If the proposal was not approved or is not a
                statute change.
        """
        proposals = self._guard.proposal_registry
        self._guard.require_approved_proposal(
            caller,
            proposal_id,
            "update the statute",
            proposals.check_action_is_statute,
        )
        statute_hash = proposals.get_proposal_statute(proposal_id)
        previous = self.schedule.current_statute_hash
        self.schedule.current_statute_hash = statute_hash
        self._log.info(
            "statute_updated",
            proposal_id=str(proposal_id),
            previous_hash=previous,
            statute_hash=statute_hash,
        )
        return statute_hash

    def get_ga_window(self, index: int) -> AssemblyWindow:
        """Return the window of assembly ``index``.

        Raises:
            InvalidAssemblyReferenceError: If index is out of range.
        """
        return self.schedule.get(index).window

    def is_during_current_ga(self) -> bool:
        """Check whether the current assembly is in progress now."""
        current = self.schedule.current()
        return current is not None and current.is_in_progress(self._time.now())
