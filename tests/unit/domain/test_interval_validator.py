"""Unit tests for the scheduling-time validator.

Boundaries are checked one second either side: spacing must strictly
exceed the required gap, and the closest-future floor is exclusive.
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.config.assembly_config import TEST_ASSEMBLY_CONFIG
from src.domain.errors.assembly import OutOfWindowError, SchedulingConflictError
from src.domain.models.assembly_schedule import AssemblySchedule
from src.domain.models.general_assembly import AssemblyCategory
from src.domain.services.interval_validator import (
    IntervalRules,
    check_scheduling_time,
    is_valid_scheduling_time,
    required_gap,
)
from tests.helpers.assembly import EPOCH, days, make_assembly, make_schedule

REGULAR = AssemblyCategory.REGULAR
EXTRAORDINARY = AssemblyCategory.EXTRAORDINARY
REGULAR_RULES = TEST_ASSEMBLY_CONFIG.interval_rules(REGULAR)
EXTRA_RULES = TEST_ASSEMBLY_CONFIG.interval_rules(EXTRAORDINARY)
ONE_SECOND = timedelta(seconds=1)
NOW = EPOCH


class TestRequiredGap:
    """Tests for required_gap."""

    def test_category_interval_applies(self) -> None:
        assert required_gap(REGULAR_RULES) == days(30)
        assert required_gap(EXTRA_RULES) == days(10)

    def test_cross_interval_is_a_floor(self) -> None:
        """A category interval below the cross interval is raised to it."""
        rules = IntervalRules(
            timespan=days(365),
            closest_future=days(10),
            min_interval=days(1),
            min_interval_cross=days(3),
        )
        assert required_gap(rules) == days(3)


class TestLookaheadWindow:
    """Tests for the timespan and closest-future limits."""

    def test_closest_future_boundary_is_exclusive(self) -> None:
        """Exactly now + closest_future is rejected even on an empty schedule."""
        schedule = AssemblySchedule()
        boundary = NOW + days(10)

        with pytest.raises(OutOfWindowError) as exc_info:
            check_scheduling_time(boundary, REGULAR, schedule, NOW, REGULAR_RULES)

        assert exc_info.value.earliest == boundary
        assert not is_valid_scheduling_time(
            boundary - ONE_SECOND, REGULAR, schedule, NOW, REGULAR_RULES
        )
        assert is_valid_scheduling_time(
            boundary + ONE_SECOND, REGULAR, schedule, NOW, REGULAR_RULES
        )

    def test_timespan_boundary_is_inclusive(self) -> None:
        schedule = AssemblySchedule()
        latest = NOW + days(365)

        assert is_valid_scheduling_time(latest, REGULAR, schedule, NOW, REGULAR_RULES)
        assert not is_valid_scheduling_time(
            latest + ONE_SECOND, REGULAR, schedule, NOW, REGULAR_RULES
        )

    def test_past_time_rejected(self) -> None:
        with pytest.raises(OutOfWindowError):
            check_scheduling_time(
                NOW - days(1), REGULAR, AssemblySchedule(), NOW, REGULAR_RULES
            )

    def test_extraordinary_window_is_shorter(self) -> None:
        schedule = AssemblySchedule()

        assert is_valid_scheduling_time(
            NOW + days(2) + ONE_SECOND, EXTRAORDINARY, schedule, NOW, EXTRA_RULES
        )
        assert not is_valid_scheduling_time(
            NOW + days(91), EXTRAORDINARY, schedule, NOW, EXTRA_RULES
        )


class TestSpacing:
    """Tests for spacing from neighboring assemblies."""

    def setup_method(self) -> None:
        self.existing = make_assembly(NOW + days(100))
        self.schedule = make_schedule(self.existing)

    def _check(self, time: datetime) -> int:
        return check_scheduling_time(time, REGULAR, self.schedule, NOW, REGULAR_RULES)

    def test_gap_exactly_min_interval_after_rejected(self) -> None:
        time = self.existing.end_time + days(30)

        with pytest.raises(SchedulingConflictError) as exc_info:
            self._check(time)

        assert exc_info.value.neighbor_index == 0
        assert exc_info.value.gap == days(30)
        assert exc_info.value.required_gap == days(30)

    def test_gap_one_second_short_after_rejected(self) -> None:
        with pytest.raises(SchedulingConflictError):
            self._check(self.existing.end_time + days(30) - ONE_SECOND)

    def test_gap_one_second_over_after_accepted(self) -> None:
        position = self._check(self.existing.end_time + days(30) + ONE_SECOND)
        assert position == 1

    def test_gap_exactly_min_interval_before_rejected(self) -> None:
        with pytest.raises(SchedulingConflictError):
            self._check(self.existing.start_time - days(30))

    def test_gap_one_second_over_before_accepted(self) -> None:
        position = self._check(self.existing.start_time - days(30) - ONE_SECOND)
        assert position == 0

    def test_extraordinary_neighbor_needs_regular_interval(self) -> None:
        """A regular assembly keeps its own interval from an extraordinary one."""
        extra = make_assembly(
            NOW + days(100), duration=timedelta(hours=1), category=EXTRAORDINARY
        )
        self.schedule = make_schedule(extra)

        assert not is_valid_scheduling_time(
            extra.end_time + days(5), REGULAR, self.schedule, NOW, REGULAR_RULES
        )
        with pytest.raises(SchedulingConflictError) as exc_info:
            self._check(extra.end_time + days(30))
        assert exc_info.value.required_gap == days(30)
        assert self._check(extra.end_time + days(30) + ONE_SECOND) == 1

    def test_extraordinary_between_regulars_does_not_shorten_spacing(self) -> None:
        """An interleaved extraordinary assembly is still a neighbor to clear."""
        extra = make_assembly(
            NOW + days(105), duration=timedelta(hours=1), category=EXTRAORDINARY
        )
        self.schedule = make_schedule(self.existing, extra)

        assert not is_valid_scheduling_time(
            NOW + days(110), REGULAR, self.schedule, NOW, REGULAR_RULES
        )

    def test_extraordinary_uses_its_own_interval(self) -> None:
        regular = make_assembly(NOW + days(20))
        self.schedule = make_schedule(regular)
        time = regular.end_time + days(10)

        with pytest.raises(SchedulingConflictError):
            check_scheduling_time(time, EXTRAORDINARY, self.schedule, NOW, EXTRA_RULES)
        assert (
            check_scheduling_time(
                time + ONE_SECOND, EXTRAORDINARY, self.schedule, NOW, EXTRA_RULES
            )
            == 1
        )

    def test_both_neighbors_checked(self) -> None:
        """A time between two assemblies must clear both of them."""
        later = make_assembly(NOW + days(200))
        self.schedule = make_schedule(self.existing, later)

        assert self._check(NOW + days(150)) == 1
        with pytest.raises(SchedulingConflictError) as exc_info:
            self._check(later.start_time - days(30))
        assert exc_info.value.neighbor_index == 1

    def test_validation_does_not_mutate_schedule(self) -> None:
        self._check(NOW + days(200))
        assert self.schedule.records == (self.existing,)


class TestNaiveTimes:
    """Scheduling times must carry a UTC offset."""

    def test_naive_time_rejected(self) -> None:
        naive = (NOW + days(100)).replace(tzinfo=None)

        with pytest.raises(ValueError, match="timezone-aware"):
            check_scheduling_time(
                naive, REGULAR, AssemblySchedule(), NOW, REGULAR_RULES
            )

    def test_predicate_propagates_naive_time_error(self) -> None:
        naive = (NOW + days(100)).replace(tzinfo=None)

        with pytest.raises(ValueError):
            is_valid_scheduling_time(
                naive, REGULAR, AssemblySchedule(), NOW, REGULAR_RULES
            )
