"""General Assembly domain model.

A GeneralAssembly is one scheduled governance meeting. Proposal voting
slots are booked inside its window through an advancing watermark, and
at most one slot is set aside for the delegate election.

Invariants:
- duration is strictly positive
- start_time <= current_end_watermark <= end_time
- delegate_election_time, when set, lies within [start_time, end_time]
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum


class AssemblyCategory(Enum):
    """Category of a General Assembly.

    Categories:
        REGULAR: Scheduled by the delegate on the normal cadence.
        EXTRAORDINARY: Convened by an approved proposal.
    """

    REGULAR = "regular"
    EXTRAORDINARY = "extraordinary"

    @classmethod
    def from_flag(cls, is_extraordinary: bool) -> AssemblyCategory:
        """Map a boolean extraordinary flag to a category."""
        return cls.EXTRAORDINARY if is_extraordinary else cls.REGULAR


@dataclass(frozen=True, eq=True)
class AssemblyWindow:
    """Start and end of a General Assembly, as exposed to readers."""

    start_time: datetime
    end_time: datetime
    category: AssemblyCategory

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time


@dataclass(frozen=True, eq=True)
class GeneralAssembly:
    """A scheduled General Assembly record.

    Frozen; every update returns a new record so the schedule can swap
    whole records in one step.

    Attributes:
        start_time: When the assembly opens (UTC).
        duration: Length of the assembly window.
        category: REGULAR or EXTRAORDINARY.
        current_end_watermark: Next free offset for a voting slot.
        statute_hash: Statute in force for this assembly, seeded when
            the assembly becomes current.
        delegate_election_time: Start of the delegate election slot, if
            one has been reserved.
    """

    start_time: datetime
    duration: timedelta
    category: AssemblyCategory
    current_end_watermark: datetime
    statute_hash: str | None = None
    delegate_election_time: datetime | None = None

    def __post_init__(self) -> None:
        """Validate record invariants."""
        if self.start_time.tzinfo is None or self.start_time.utcoffset() is None:
            raise ValueError(
                f"start_time must be timezone-aware, got {self.start_time.isoformat()}"
            )
        if self.duration <= timedelta(0):
            raise ValueError(f"duration must be positive, got {self.duration}")
        if not self.start_time <= self.current_end_watermark <= self.end_time:
            raise ValueError(
                "current_end_watermark must lie within the assembly window, got "
                f"{self.current_end_watermark.isoformat()}"
            )
        if self.delegate_election_time is not None and not (
            self.start_time <= self.delegate_election_time <= self.end_time
        ):
            raise ValueError(
                "delegate_election_time must lie within the assembly window, got "
                f"{self.delegate_election_time.isoformat()}"
            )

    @classmethod
    def create(
        cls,
        start_time: datetime,
        duration: timedelta,
        category: AssemblyCategory,
    ) -> GeneralAssembly:
        """Create a freshly scheduled assembly with an empty slot book.

        Args:
            start_time: When the assembly opens.
            duration: Length of the assembly window.
            category: REGULAR or EXTRAORDINARY.

        Returns:
            New GeneralAssembly whose watermark sits at its start time.
        """
        return cls(
            start_time=start_time,
            duration=duration,
            category=category,
            current_end_watermark=start_time,
        )

    @property
    def end_time(self) -> datetime:
        return self.start_time + self.duration

    @property
    def is_extraordinary(self) -> bool:
        return self.category is AssemblyCategory.EXTRAORDINARY

    @property
    def window(self) -> AssemblyWindow:
        return AssemblyWindow(
            start_time=self.start_time,
            end_time=self.end_time,
            category=self.category,
        )

    def has_started(self, now: datetime) -> bool:
        """Check whether the assembly window has begun at ``now``."""
        return now >= self.start_time

    def is_in_progress(self, now: datetime) -> bool:
        """Check whether ``now`` falls inside [start_time, end_time)."""
        return self.start_time <= now < self.end_time

    def can_book(self, slot_length: timedelta) -> bool:
        """Check whether a slot of ``slot_length`` still fits before the end."""
        return self.current_end_watermark + slot_length <= self.end_time

    def with_watermark(self, watermark: datetime) -> GeneralAssembly:
        """Return a copy with the watermark moved, clamped to the window end."""
        return replace(self, current_end_watermark=min(watermark, self.end_time))

    def with_delegate_election_time(self, election_time: datetime) -> GeneralAssembly:
        return replace(self, delegate_election_time=election_time)

    def with_statute_hash(self, statute_hash: str | None) -> GeneralAssembly:
        return replace(self, statute_hash=statute_hash)
