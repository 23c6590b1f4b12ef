"""Assembly scheduling service - inserts General Assemblies into the schedule.

Regular assemblies are scheduled by the delegate; extraordinary ones are
convened by an approved proposal. Either way the requested time is
validated against the lookahead window, the closest-future floor and
the spacing from neighboring assemblies before the schedule changes.

Insertion builds the shifted sequence as a new tuple and installs it in
one step: entries at or after the insertion position move one place
later and nothing is mutated index by index.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from uuid import UUID

import structlog

from src.application.ports.assembly_metrics import AssemblyMetricsProtocol
from src.application.ports.time_authority import TimeAuthorityProtocol
from src.application.services.caller_guard import CallerGuard
from src.config.assembly_config import DEFAULT_ASSEMBLY_CONFIG, AssemblyConfig
from src.domain.errors.assembly import (
    AssemblySchedulingError,
    InvalidDurationError,
    OutOfWindowError,
    UnauthorizedError,
)
from src.domain.models.assembly_schedule import AssemblySchedule
from src.domain.models.general_assembly import AssemblyCategory, GeneralAssembly
from src.domain.services.duration_validator import validate_duration
from src.domain.services.interval_validator import (
    check_scheduling_time,
    is_valid_scheduling_time,
)

logger = structlog.get_logger(__name__)

_REJECTION_REASONS: dict[type[AssemblySchedulingError], str] = {
    OutOfWindowError: "out_of_window",
    InvalidDurationError: "invalid_duration",
}


class AssemblySchedulingService:
    """Schedules regular and extraordinary General Assemblies.

    Attributes:
        schedule: The schedule this service inserts into (shared by reference
            with the slot and lifecycle services).
    """

    def __init__(
        self,
        schedule: AssemblySchedule,
        guard: CallerGuard,
        time_authority: TimeAuthorityProtocol,
        config: AssemblyConfig = DEFAULT_ASSEMBLY_CONFIG,
        metrics: AssemblyMetricsProtocol | None = None,
    ) -> None:
        """Initialize the scheduling service.

        Args:
            schedule: Schedule to insert into.
            guard: Authorization checks.
            time_authority: Governance clock.
            config: Scheduling windows and durations.
            metrics: Optional metrics collector.
        """
        self.schedule = schedule
        self._guard = guard
        self._time = time_authority
        self._config = config
        self._metrics = metrics
        self._log = logger.bind(component="assembly_scheduling")

    def schedule_regular_ga(
        self, caller: str, start_time: datetime, duration: timedelta
    ) -> int:
        """Schedule a regular General Assembly.

        Args:
            caller: Identity requesting the assembly; must be the delegate.
            start_time: When the assembly opens.
            duration: Length of the assembly.

        Returns:
            Index of the new assembly in the schedule.

        Raises:
            UnauthorizedError: If the caller is not the delegate.
            InvalidDurationError: If the duration is out of bounds.
            OutOfWindowError: If start_time is too soon or too far ahead.
            SchedulingConflictError: If start_time is too close to a neighbor.
        """
        try:
            self._guard.require_delegate(caller, "schedule a regular GA")
        except UnauthorizedError:
            self._record_rejection("unauthorized")
            raise
        return self._insert(start_time, duration, AssemblyCategory.REGULAR)

    def schedule_extraordinary_ga(self, caller: str, proposal_id: UUID) -> int:
        """Convene an extraordinary General Assembly from an approved proposal.

        The start time comes from the proposal; the duration is the
        configured extraordinary duration. Each proposal convenes at most
        one assembly.

        Args:
            caller: Identity relaying the proposal.
            proposal_id: Approved proposal requesting the assembly.

        Returns:
            Index of the new assembly in the schedule.

        Raises:
            UnauthorizedError: If the proposal was not approved, is not a
                GA request, or already convened an assembly.
            OutOfWindowError: If the proposed date is too soon or too far ahead.
            SchedulingConflictError: If the proposed date is too close to a neighbor.
        """
        action = "convene an extraordinary GA"
        proposals = self._guard.proposal_registry
        try:
            if self.schedule.has_convened(proposal_id):
                raise UnauthorizedError(
                    caller, action, f"proposal {proposal_id} already convened a GA"
                )
            self._guard.require_approved_proposal(
                caller,
                proposal_id,
                action,
                proposals.check_action_is_successful_ga,
            )
        except UnauthorizedError:
            self._record_rejection("unauthorized")
            raise

        start_time = proposals.get_proposal_proposed_date(proposal_id)
        index = self._insert(
            start_time,
            self._config.extra_ga_duration,
            AssemblyCategory.EXTRAORDINARY,
        )
        self.schedule.mark_convened(proposal_id)
        return index

    def can_schedule_at(self, start_time: datetime, is_extraordinary: bool) -> bool:
        """Check whether an assembly could be scheduled at ``start_time`` now."""
        category = AssemblyCategory.from_flag(is_extraordinary)
        return is_valid_scheduling_time(
            start_time,
            category,
            self.schedule,
            self._time.now(),
            self._config.interval_rules(category),
        )

    def _insert(
        self,
        start_time: datetime,
        duration: timedelta,
        category: AssemblyCategory,
    ) -> int:
        log = self._log.bind(
            start_time=start_time.isoformat(),
            duration_seconds=duration.total_seconds(),
            category=category.value,
        )
        try:
            validate_duration(duration, self._config.max_duration)
            position = check_scheduling_time(
                start_time,
                category,
                self.schedule,
                self._time.now(),
                self._config.interval_rules(category),
            )
        except AssemblySchedulingError as exc:
            reason = _REJECTION_REASONS.get(type(exc), "scheduling_conflict")
            log.info("ga_scheduling_rejected", reason=reason, error=str(exc))
            self._record_rejection(reason)
            raise

        record = GeneralAssembly.create(start_time, duration, category)
        records = self.schedule.records
        self.schedule.install(records[:position] + (record,) + records[position:])

        log.info(
            "ga_scheduled",
            index=position,
            total_scheduled=self.schedule.total_scheduled,
        )
        if self._metrics is not None:
            self._metrics.record_ga_scheduled(category)
        return position

    def _record_rejection(self, reason: str) -> None:
        if self._metrics is not None:
            self._metrics.record_scheduling_rejected(reason)
