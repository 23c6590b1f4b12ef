"""Scheduling-time validation domain service.

Decides whether a General Assembly may be scheduled at a given time,
given the existing schedule and the current time. The checks are pure:
nothing is mutated and the same inputs always give the same answer.

Checks, in order:
- Lookahead: time lies within now + [0, timespan]
- Closest future: time is strictly later than now + closest_future
- Spacing: scanning from the cursor, the gap from the preceding
  assembly's end to time, and from time to the following assembly's
  start, must strictly exceed the new assembly's category interval,
  whatever the neighbor's category. The cross interval is a floor under
  every category interval.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from src.domain.errors.assembly import OutOfWindowError, SchedulingConflictError
from src.domain.models.assembly_schedule import AssemblySchedule
from src.domain.models.general_assembly import AssemblyCategory


@dataclass(frozen=True, eq=True)
class IntervalRules:
    """Timing rules for one assembly category.

    Attributes:
        timespan: How far ahead an assembly may be scheduled.
        closest_future: How soon an assembly may be scheduled (exclusive).
        min_interval: Spacing required from any neighboring assembly.
        min_interval_cross: Floor under min_interval shared by all categories.
    """

    timespan: timedelta
    closest_future: timedelta
    min_interval: timedelta
    min_interval_cross: timedelta


def required_gap(rules: IntervalRules) -> timedelta:
    """Return the gap that must be exceeded on both sides of a new assembly."""
    return max(rules.min_interval, rules.min_interval_cross)


def check_scheduling_time(
    time: datetime,
    category: AssemblyCategory,
    schedule: AssemblySchedule,
    now: datetime,
    rules: IntervalRules,
) -> int:
    """Validate a scheduling time and locate its insertion position.

    Args:
        time: Requested start time.
        category: Category of the requested assembly.
        schedule: Current schedule (read only).
        now: Current time.
        rules: Timing rules for ``category``.

    Returns:
        Index at which the assembly would be inserted.

    Raises:
        OutOfWindowError: If time violates the lookahead or closest-future limit.
        SchedulingConflictError: If time is too close to a neighbor.
        ValueError: If time is naive (has no UTC offset).
    """
    if time.tzinfo is None or time.utcoffset() is None:
        raise ValueError(
            f"scheduling time must be timezone-aware, got {time.isoformat()}"
        )
    earliest = now + rules.closest_future
    latest = now + rules.timespan
    if time < now or time > latest or time <= earliest:
        raise OutOfWindowError(time, earliest=earliest, latest=latest)

    position = schedule.insertion_position(time)
    records = schedule.records
    needed = required_gap(rules)

    if position - 1 >= schedule.scan_start:
        preceding = records[position - 1]
        gap = time - preceding.end_time
        if gap <= needed:
            raise SchedulingConflictError(time, position - 1, gap, needed)

    if position < len(records):
        following = records[position]
        gap = following.start_time - time
        if gap <= needed:
            raise SchedulingConflictError(time, position, gap, needed)

    return position


def is_valid_scheduling_time(
    time: datetime,
    category: AssemblyCategory,
    schedule: AssemblySchedule,
    now: datetime,
    rules: IntervalRules,
) -> bool:
    """Predicate form of check_scheduling_time.

    Returns:
        True if an assembly of ``category`` may be scheduled at ``time``.

    Raises:
        ValueError: If time is naive.
    """
    try:
        check_scheduling_time(time, category, schedule, now, rules)
    except (OutOfWindowError, SchedulingConflictError):
        return False
    return True
