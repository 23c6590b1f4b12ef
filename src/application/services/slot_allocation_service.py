"""Slot allocation service - books voting windows inside a General Assembly.

Each assembly carries a watermark marking the next free offset in its
window. Booking a slot returns the watermark and moves it forward by the
voting duration plus the inter-proposal gap, so slots never overlap and
the watermark never passes the end of the assembly.

Booking rules:
- Slots are only handed out before the assembly starts
- A slot must fit entirely before the assembly ends
- The delegate election slot is booked once per assembly; asking again
  returns the slot already booked
"""

from __future__ import annotations

from datetime import datetime
from typing import NoReturn

import structlog

from src.application.ports.assembly_metrics import AssemblyMetricsProtocol
from src.application.ports.time_authority import TimeAuthorityProtocol
from src.application.services.caller_guard import CallerGuard
from src.config.assembly_config import DEFAULT_ASSEMBLY_CONFIG, AssemblyConfig
from src.domain.errors.assembly import NoCapacityError, SlotRejectionReason
from src.domain.models.assembly_schedule import AssemblySchedule
from src.domain.models.general_assembly import GeneralAssembly

logger = structlog.get_logger(__name__)

PROPOSAL_SLOT = "proposal"
DELEGATE_ELECTION_SLOT = "delegate_election"


class SlotAllocationService:
    """Issues non-overlapping voting slots via the assembly watermark."""

    def __init__(
        self,
        schedule: AssemblySchedule,
        guard: CallerGuard,
        time_authority: TimeAuthorityProtocol,
        config: AssemblyConfig = DEFAULT_ASSEMBLY_CONFIG,
        metrics: AssemblyMetricsProtocol | None = None,
    ) -> None:
        self.schedule = schedule
        self._guard = guard
        self._time = time_authority
        self._config = config
        self._metrics = metrics
        self._log = logger.bind(component="slot_allocation")

    def reserve_proposal_slot(self, caller: str, ga_index: int) -> datetime:
        """Reserve a proposal voting slot in assembly ``ga_index``.

        Args:
            caller: Must be the proposal gateway.
            ga_index: Index of the target assembly.

        Returns:
            Start of the reserved slot.

        Raises:
            UnauthorizedError: If the caller is not the proposal gateway.
            InvalidAssemblyReferenceError: If ga_index is out of range.
            NoCapacityError: If the assembly has started or is fully booked.
                Do not retry against the same assembly.
        """
        self._guard.require_proposal_gateway(caller, "reserve a proposal slot")
        updated, slot_start = self._book(ga_index, PROPOSAL_SLOT)
        self.schedule.replace(ga_index, updated)
        self._reserved(ga_index, slot_start, PROPOSAL_SLOT)
        return slot_start

    def reserve_delegate_election_slot(self, caller: str, ga_index: int) -> datetime:
        """Reserve the delegate election slot in assembly ``ga_index``.

        Idempotent: if the assembly already has an election slot, that
        slot is returned and no further capacity is consumed.

        Args:
            caller: Must be the proposal gateway.
            ga_index: Index of the target assembly.

        Returns:
            Start of the delegate election slot.

        Raises:
            UnauthorizedError: If the caller is not the proposal gateway.
            InvalidAssemblyReferenceError: If ga_index is out of range.
            NoCapacityError: If no election slot exists yet and the assembly
                has started or is fully booked.
        """
        self._guard.require_proposal_gateway(
            caller, "reserve the delegate election slot"
        )
        assembly = self.schedule.get(ga_index)
        if assembly.delegate_election_time is not None:
            self._log.debug(
                "delegate_election_slot_already_reserved",
                ga_index=ga_index,
                slot_start=assembly.delegate_election_time.isoformat(),
            )
            return assembly.delegate_election_time

        updated, slot_start = self._book(ga_index, DELEGATE_ELECTION_SLOT)
        self.schedule.replace(
            ga_index, updated.with_delegate_election_time(slot_start)
        )
        self._reserved(ga_index, slot_start, DELEGATE_ELECTION_SLOT)
        return slot_start

    def _book(self, ga_index: int, kind: str) -> tuple[GeneralAssembly, datetime]:
        """Compute the booked record without installing it."""
        assembly = self.schedule.get(ga_index)
        if assembly.has_started(self._time.now()):
            self._reject(ga_index, kind, SlotRejectionReason.GA_STARTED)
        if not assembly.can_book(self._config.voting_duration):
            self._reject(ga_index, kind, SlotRejectionReason.FULLY_BOOKED)

        slot_start = assembly.current_end_watermark
        updated = assembly.with_watermark(slot_start + self._config.slot_stride)
        return updated, slot_start

    def _reject(
        self, ga_index: int, kind: str, reason: SlotRejectionReason
    ) -> NoReturn:
        self._log.info(
            "slot_reservation_rejected",
            ga_index=ga_index,
            slot_kind=kind,
            reason=reason.value,
        )
        if self._metrics is not None:
            self._metrics.record_slot_rejected(reason.value)
        raise NoCapacityError(ga_index, reason)

    def _reserved(self, ga_index: int, slot_start: datetime, kind: str) -> None:
        self._log.info(
            "slot_reserved",
            ga_index=ga_index,
            slot_kind=kind,
            slot_start=slot_start.isoformat(),
        )
        if self._metrics is not None:
            self._metrics.record_slot_reserved(kind)
