"""Ordered schedule of General Assemblies.

The AssemblySchedule owns the chronological sequence of assemblies, the
cursor to the current (or most recently concluded) assembly and the
statute hash currently in force.

Invariants:
- records are strictly ascending by start_time at all times
- a new sequence is computed first and then installed whole; records
  are never shifted in place
- entries before the cursor are concluded
- the cursor only moves forward, one assembly at a time
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from uuid import UUID

from src.domain.errors.assembly import (
    InvalidAssemblyReferenceError,
    ScheduleOrderError,
)
from src.domain.models.general_assembly import GeneralAssembly


class AssemblySchedule:
    """Mutable owner of the ordered assembly sequence.

    Records themselves are frozen; mutation happens only by installing
    a replacement tuple, so a failed validation leaves the schedule as
    it was.

    Attributes:
        cursor: Index of the current/last-concluded assembly, or None
            before any assembly has begun.
        current_statute_hash: Statute in force process-wide.
    """

    def __init__(
        self,
        records: Iterable[GeneralAssembly] = (),
        cursor: int | None = None,
        current_statute_hash: str | None = None,
        convened_proposals: Iterable[UUID] = (),
    ) -> None:
        """Initialize the schedule, validating ordering and cursor.

        Args:
            records: Assemblies in chronological order.
            cursor: Index of the current assembly, if any has begun.
            current_statute_hash: Statute in force.
            convened_proposals: Proposal ids that already convened an
                extraordinary assembly.

        Raises:
            ScheduleOrderError: If records are not strictly ascending.
            ValueError: If the cursor does not point into records.
        """
        self._records: tuple[GeneralAssembly, ...] = ()
        self.install(tuple(records))
        if cursor is not None and not 0 <= cursor < len(self._records):
            raise ValueError(
                f"cursor {cursor} does not point into {len(self._records)} records"
            )
        self._cursor = cursor
        self.current_statute_hash = current_statute_hash
        self._convened_proposals: set[UUID] = set(convened_proposals)

    @property
    def records(self) -> tuple[GeneralAssembly, ...]:
        return self._records

    @property
    def total_scheduled(self) -> int:
        return len(self._records)

    @property
    def cursor(self) -> int | None:
        return self._cursor

    @property
    def convened_proposals(self) -> frozenset[UUID]:
        return frozenset(self._convened_proposals)

    @property
    def scan_start(self) -> int:
        """Index from which forward scans begin (the cursor, or 0)."""
        return self._cursor if self._cursor is not None else 0

    @property
    def upcoming_index(self) -> int:
        """Index of the assembly immediately following the cursor."""
        return self._cursor + 1 if self._cursor is not None else 0

    def get(self, index: int) -> GeneralAssembly:
        """Return the assembly at ``index``.

        Raises:
            InvalidAssemblyReferenceError: If index is out of range.
        """
        if not 0 <= index < len(self._records):
            raise InvalidAssemblyReferenceError(index, len(self._records))
        return self._records[index]

    def current(self) -> GeneralAssembly | None:
        """Return the assembly at the cursor, or None before the first one."""
        if self._cursor is None:
            return None
        return self._records[self._cursor]

    def upcoming(self) -> GeneralAssembly | None:
        """Return the assembly following the cursor, or None if none is scheduled."""
        index = self.upcoming_index
        if index >= len(self._records):
            return None
        return self._records[index]

    def insertion_position(self, time: datetime) -> int:
        """Find where an assembly starting at ``time`` belongs.

        Scans from the cursor forward for the first assembly that starts
        after ``time``.

        Returns:
            Index of that assembly, or total_scheduled to append.
        """
        for index in range(self.scan_start, len(self._records)):
            if self._records[index].start_time > time:
                return index
        return len(self._records)

    def install(self, records: tuple[GeneralAssembly, ...]) -> None:
        """Replace the record sequence after verifying strict ordering.

        Raises:
            ScheduleOrderError: If any record does not start strictly
                after its predecessor. The schedule is left unchanged.
        """
        for position in range(1, len(records)):
            if records[position].start_time <= records[position - 1].start_time:
                raise ScheduleOrderError(position)
        self._records = records

    def replace(self, index: int, record: GeneralAssembly) -> None:
        """Swap the record at ``index`` for an updated copy."""
        self.get(index)
        self.install(self._records[:index] + (record,) + self._records[index + 1 :])

    def advance_cursor(self) -> GeneralAssembly:
        """Move the cursor one assembly forward and seed its statute hash.

        Returns:
            The new current assembly.

        Raises:
            InvalidAssemblyReferenceError: If no assembly follows the cursor.
        """
        index = self.upcoming_index
        seeded = self.get(index).with_statute_hash(self.current_statute_hash)
        self.replace(index, seeded)
        self._cursor = index
        return seeded

    def has_convened(self, proposal_id: UUID) -> bool:
        return proposal_id in self._convened_proposals

    def mark_convened(self, proposal_id: UUID) -> None:
        self._convened_proposals.add(proposal_id)

    def copy(self) -> AssemblySchedule:
        """Return an independent copy of the schedule."""
        return AssemblySchedule(
            records=self._records,
            cursor=self._cursor,
            current_statute_hash=self.current_statute_hash,
            convened_proposals=self._convened_proposals,
        )

    def restore(self, saved: AssemblySchedule) -> None:
        """Overwrite this schedule in place with the contents of ``saved``.

        Services share one schedule object, so rollback has to happen in
        place rather than by swapping the reference.
        """
        self._records = saved.records
        self._cursor = saved.cursor
        self.current_statute_hash = saved.current_statute_hash
        self._convened_proposals = set(saved.convened_proposals)
