"""Integration test for a full assembly governance cycle.

Schedules assemblies, books slots, elects a new delegate, carries the
statute forward and restores everything from the JSON state file.
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest

from src.application.services.general_assembly_service import GeneralAssemblyService
from src.config.assembly_config import TEST_ASSEMBLY_CONFIG
from src.domain.models.candidacy_round import TallyOutcome
from src.domain.models.general_assembly import AssemblyCategory
from src.infrastructure.adapters.persistence import JsonFileAssemblyStateRepository
from src.infrastructure.stubs.access_registry_stub import AccessRegistryStub
from src.infrastructure.stubs.proposal_registry_stub import ProposalRegistryStub
from tests.helpers.assembly import ASSEMBLY_LENGTH, DELEGATE, EPOCH, GATEWAY, days
from tests.helpers.fake_time_authority import FakeTimeAuthority

FIRST_START = EPOCH + days(40)
SECOND_START = EPOCH + days(120)


def build_service(
    path: Path,
    access_registry: AccessRegistryStub,
    proposal_registry: ProposalRegistryStub,
    clock: FakeTimeAuthority,
) -> GeneralAssemblyService:
    return GeneralAssemblyService(
        access_registry=access_registry,
        proposal_registry=proposal_registry,
        time_authority=clock,
        config=TEST_ASSEMBLY_CONFIG,
        repository=JsonFileAssemblyStateRepository(path),
    )


class TestGeneralAssemblyCycle:
    """End-to-end governance cycle across a process restart."""

    def test_full_cycle(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        access_registry = AccessRegistryStub(delegate=DELEGATE)
        proposal_registry = ProposalRegistryStub()
        clock = FakeTimeAuthority(frozen_at=EPOCH)
        service = build_service(path, access_registry, proposal_registry, clock)

        # Delegate schedules two regular assemblies; a proposal convenes a third.
        assert service.schedule_regular_ga(DELEGATE, SECOND_START, ASSEMBLY_LENGTH) == 0
        assert service.schedule_regular_ga(DELEGATE, FIRST_START, ASSEMBLY_LENGTH) == 0
        extra_id = proposal_registry.add_ga_proposal(EPOCH + days(20))
        assert service.schedule_extraordinary_ga(GATEWAY, extra_id) == 0
        categories = [a.category for a in service.state.schedule.records]
        assert categories == [
            AssemblyCategory.EXTRAORDINARY,
            AssemblyCategory.REGULAR,
            AssemblyCategory.REGULAR,
        ]

        # Slots in the first regular assembly.
        assert service.reserve_proposal_slot(GATEWAY, 1) == FIRST_START
        election_slot = service.reserve_delegate_election_slot(GATEWAY, 1)
        assert election_slot == FIRST_START + timedelta(minutes=15)

        # Statute change takes effect at the next assembly.
        statute_id = proposal_registry.add_statute_proposal("statute-v2")
        service.update_statute(GATEWAY, statute_id)

        # Extraordinary assembly begins; candidates register for the next one.
        clock.set_time(EPOCH + days(20))
        assert service.advance_if_elapsed()
        assert service.get_ga(0).statute_hash == "statute-v2"
        service.register_candidate(GATEWAY, "bob")
        service.register_candidate(GATEWAY, "carol")
        for identity in ("bob", "bob", "bob", "carol"):
            service.cast_delegate_vote(GATEWAY, identity)

        # Process restart: everything comes back from the state file.
        restarted = build_service(path, access_registry, proposal_registry, clock)
        assert restarted.total_scheduled == 3
        assert restarted.cursor == 0
        assert restarted.current_statute_hash == "statute-v2"
        assert [c.supporting_vote_count for c in restarted.candidates()] == [3, 1]
        assert restarted.get_ga(1).delegate_election_time == election_slot

        # First regular assembly opens its election slot and concludes voting.
        clock.set_time(election_slot)
        assert restarted.advance_if_elapsed()
        assert restarted.can_vote_for_delegate_now()
        result = restarted.conclude_delegate_voting(GATEWAY, 3, 2)
        assert result.outcome is TallyOutcome.ELECTED
        assert result.as_tuple() == (True, False, 0)
        assert access_registry.delegate == "bob"

        # The new delegate schedules the following assembly.
        assert restarted.schedule_regular_ga(
            "bob", SECOND_START + days(60), ASSEMBLY_LENGTH
        ) == 3

        final = JsonFileAssemblyStateRepository(path).load()
        assert final is not None
        assert final.candidacy_round is None
        assert final.schedule.total_scheduled == 4
        assert final.schedule.cursor == 1


class TestStateFileFailure:
    """Memory and the state file agree after a failed write."""

    def test_failed_conclusion_matches_state_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "state.json"
        access_registry = AccessRegistryStub(delegate=DELEGATE)
        proposal_registry = ProposalRegistryStub()
        clock = FakeTimeAuthority(frozen_at=EPOCH)
        service = build_service(path, access_registry, proposal_registry, clock)
        service.schedule_regular_ga(DELEGATE, FIRST_START, ASSEMBLY_LENGTH)
        service.register_candidate(GATEWAY, "bob")
        for _ in range(3):
            service.cast_delegate_vote(GATEWAY, "bob")

        def fail_replace(src: object, dst: object) -> None:
            raise OSError("disk full")

        monkeypatch.setattr(
            "src.infrastructure.adapters.persistence.json_file_state_repository.os.replace",
            fail_replace,
        )
        with pytest.raises(OSError, match="disk full"):
            service.conclude_delegate_voting(GATEWAY, 1, 1)
        monkeypatch.undo()

        restarted = build_service(path, access_registry, proposal_registry, clock)
        assert service.candidates() == restarted.candidates()
        assert [c.supporting_vote_count for c in restarted.candidates()] == [3]

        result = restarted.conclude_delegate_voting(GATEWAY, 1, 1)
        assert result.outcome is TallyOutcome.ELECTED
        assert access_registry.delegate == "bob"
        final = JsonFileAssemblyStateRepository(path).load()
        assert final is not None
        assert final.candidacy_round is None
