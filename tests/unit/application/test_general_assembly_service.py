"""Unit tests for the GeneralAssemblyService facade.

Covers state restoration, save-after-success, metrics and logging.
"""

from __future__ import annotations

import pytest
from prometheus_client import CollectorRegistry
from structlog.testing import capture_logs

from src.application.services.general_assembly_service import GeneralAssemblyService
from src.config.assembly_config import TEST_ASSEMBLY_CONFIG
from src.domain.errors.assembly import NoCapacityError, UnauthorizedError
from src.domain.models.assembly_state import AssemblyState
from src.domain.models.candidacy_round import Candidate, CandidacyRound
from src.infrastructure.monitoring.assembly_metrics import AssemblyMetricsCollector
from src.infrastructure.stubs.access_registry_stub import AccessRegistryStub
from src.infrastructure.stubs.assembly_state_repository_stub import (
    AssemblyStateRepositoryStub,
)
from src.infrastructure.stubs.proposal_registry_stub import ProposalRegistryStub
from tests.helpers.assembly import (
    ASSEMBLY_LENGTH,
    DELEGATE,
    EPOCH,
    GATEWAY,
    days,
    make_assembly,
    make_schedule,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority

START = EPOCH + days(100)


class TestStateRestoration:
    """Tests for loading state from the repository."""

    def test_restores_schedule_and_round(
        self,
        access_registry: AccessRegistryStub,
        proposal_registry: ProposalRegistryStub,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        saved = AssemblyState(
            schedule=make_schedule(make_assembly(START)),
            candidacy_round=CandidacyRound(
                candidates=[Candidate("bob", 2)], total_participants=2
            ),
        )
        service = GeneralAssemblyService(
            access_registry=access_registry,
            proposal_registry=proposal_registry,
            time_authority=fake_time_authority,
            config=TEST_ASSEMBLY_CONFIG,
            repository=AssemblyStateRepositoryStub(initial=saved),
        )

        assert service.total_scheduled == 1
        assert service.candidates() == (Candidate("bob", 2),)
        assert service.cast_delegate_vote(GATEWAY, "bob") == 3

    def test_starts_empty_without_saved_state(
        self, service: GeneralAssemblyService
    ) -> None:
        assert service.total_scheduled == 0
        assert service.cursor is None
        assert service.current_statute_hash is None


class TestSaveAfterMutation:
    """The full state is saved after each successful mutation."""

    def test_each_mutation_saves(
        self,
        service: GeneralAssemblyService,
        state_repository: AssemblyStateRepositoryStub,
    ) -> None:
        service.schedule_regular_ga(DELEGATE, START, ASSEMBLY_LENGTH)
        service.reserve_proposal_slot(GATEWAY, 0)
        service.register_candidate(GATEWAY, "bob")
        service.cast_delegate_vote(GATEWAY, "bob")
        service.conclude_delegate_voting(GATEWAY, 0, 0)

        assert state_repository.save_count == 5
        saved = state_repository.load()
        assert saved is not None
        assert saved.candidacy_round is None
        assert saved.schedule.get(0).current_end_watermark > START

    def test_rejected_mutation_does_not_save(
        self,
        service: GeneralAssemblyService,
        state_repository: AssemblyStateRepositoryStub,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        service.schedule_regular_ga(DELEGATE, START, ASSEMBLY_LENGTH)
        fake_time_authority.set_time(START)

        with pytest.raises(NoCapacityError):
            service.reserve_proposal_slot(GATEWAY, 0)
        with pytest.raises(UnauthorizedError):
            service.register_candidate(DELEGATE, "bob")

        assert state_repository.save_count == 1

    def test_reads_do_not_save(
        self,
        service: GeneralAssemblyService,
        state_repository: AssemblyStateRepositoryStub,
    ) -> None:
        service.schedule_regular_ga(DELEGATE, START, ASSEMBLY_LENGTH)

        service.get_ga(0)
        service.get_ga_window(0)
        service.is_during_current_ga()
        service.can_vote_for_delegate_now()
        service.can_schedule_at(START + days(60), False)

        assert state_repository.save_count == 1


class TestMetrics:
    """Tests for metrics recorded through the facade."""

    def test_operations_are_counted(
        self,
        access_registry: AccessRegistryStub,
        proposal_registry: ProposalRegistryStub,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        registry = CollectorRegistry()
        metrics = AssemblyMetricsCollector(registry=registry)
        service = GeneralAssemblyService(
            access_registry=access_registry,
            proposal_registry=proposal_registry,
            time_authority=fake_time_authority,
            config=TEST_ASSEMBLY_CONFIG,
            metrics=metrics,
        )
        labels = metrics._labels()

        service.schedule_regular_ga(DELEGATE, START, ASSEMBLY_LENGTH)
        service.reserve_proposal_slot(GATEWAY, 0)
        with pytest.raises(UnauthorizedError):
            service.schedule_regular_ga("mallory", START + days(60), ASSEMBLY_LENGTH)

        assert registry.get_sample_value(
            "ga_scheduled_total", {**labels, "category": "regular"}
        ) == 1.0
        assert registry.get_sample_value(
            "ga_slots_reserved_total", {**labels, "kind": "proposal"}
        ) == 1.0
        assert registry.get_sample_value(
            "ga_scheduling_rejected_total", {**labels, "reason": "unauthorized"}
        ) == 1.0


class TestLogging:
    """Tests for structured log events."""

    def test_scheduling_logs_event(self, service: GeneralAssemblyService) -> None:
        with capture_logs() as logs:
            service.schedule_regular_ga(DELEGATE, START, ASSEMBLY_LENGTH)

        events = [entry for entry in logs if entry["event"] == "ga_scheduled"]
        assert len(events) == 1
        assert events[0]["component"] == "assembly_scheduling"
        assert events[0]["index"] == 0

    def test_slot_rejection_logs_reason(
        self,
        service: GeneralAssemblyService,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        service.schedule_regular_ga(DELEGATE, START, ASSEMBLY_LENGTH)
        fake_time_authority.set_time(START)

        with capture_logs() as logs:
            with pytest.raises(NoCapacityError):
                service.reserve_proposal_slot(GATEWAY, 0)

        rejected = [e for e in logs if e["event"] == "slot_reservation_rejected"]
        assert rejected[0]["reason"] == "ga_started"


class TestSaveFailureRollback:
    """A failed save rolls the in-memory state back to before the call."""

    @pytest.fixture
    def voted(
        self,
        service: GeneralAssemblyService,
    ) -> GeneralAssemblyService:
        """Service with one upcoming assembly and three votes for bob."""
        service.schedule_regular_ga(DELEGATE, START, ASSEMBLY_LENGTH)
        service.register_candidate(GATEWAY, "bob")
        for _ in range(3):
            service.cast_delegate_vote(GATEWAY, "bob")
        return service

    def test_failed_conclusion_keeps_round_open(
        self,
        voted: GeneralAssemblyService,
        state_repository: AssemblyStateRepositoryStub,
    ) -> None:
        state_repository.fail_on_save = True

        with pytest.raises(OSError):
            voted.conclude_delegate_voting(GATEWAY, 1, 1)

        assert voted.candidates() == (Candidate("bob", 3),)
        assert voted.state.candidacy_round is not None
        assert voted.state.candidacy_round.total_participants == 3

    def test_conclusion_can_be_retried_after_failed_save(
        self,
        voted: GeneralAssemblyService,
        state_repository: AssemblyStateRepositoryStub,
        access_registry: AccessRegistryStub,
    ) -> None:
        state_repository.fail_on_save = True
        with pytest.raises(OSError):
            voted.conclude_delegate_voting(GATEWAY, 1, 1)

        state_repository.fail_on_save = False
        result = voted.conclude_delegate_voting(GATEWAY, 1, 1)

        assert result.winner == "bob"
        assert voted.candidates() == ()
        assert access_registry.delegate == "bob"
        saved = state_repository.load()
        assert saved is not None
        assert saved.candidacy_round is None

    def test_failed_vote_is_not_counted(
        self,
        voted: GeneralAssemblyService,
        state_repository: AssemblyStateRepositoryStub,
    ) -> None:
        state_repository.fail_on_save = True

        with pytest.raises(OSError):
            voted.cast_delegate_vote(GATEWAY, "bob")

        assert voted.candidates() == (Candidate("bob", 3),)

    def test_failed_scheduling_leaves_schedule_unchanged(
        self,
        service: GeneralAssemblyService,
        state_repository: AssemblyStateRepositoryStub,
    ) -> None:
        state_repository.fail_on_save = True

        with pytest.raises(OSError):
            service.schedule_regular_ga(DELEGATE, START, ASSEMBLY_LENGTH)

        assert service.total_scheduled == 0
        state_repository.fail_on_save = False
        assert service.schedule_regular_ga(DELEGATE, START, ASSEMBLY_LENGTH) == 0

    def test_failed_convening_does_not_consume_proposal(
        self,
        service: GeneralAssemblyService,
        state_repository: AssemblyStateRepositoryStub,
        proposal_registry: ProposalRegistryStub,
    ) -> None:
        proposal_id = proposal_registry.add_ga_proposal(EPOCH + days(20))
        state_repository.fail_on_save = True

        with pytest.raises(OSError):
            service.schedule_extraordinary_ga(GATEWAY, proposal_id)

        assert not service.state.schedule.has_convened(proposal_id)
        assert service.total_scheduled == 0

    def test_failed_advance_keeps_cursor(
        self,
        service: GeneralAssemblyService,
        state_repository: AssemblyStateRepositoryStub,
        proposal_registry: ProposalRegistryStub,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        service.schedule_regular_ga(DELEGATE, START, ASSEMBLY_LENGTH)
        statute_id = proposal_registry.add_statute_proposal("statute-v2")
        service.update_statute(GATEWAY, statute_id)
        fake_time_authority.set_time(START)
        state_repository.fail_on_save = True

        with pytest.raises(OSError):
            service.advance_if_elapsed()

        assert service.cursor is None
        assert service.get_ga(0).statute_hash is None

    def test_failed_save_is_logged(
        self,
        service: GeneralAssemblyService,
        state_repository: AssemblyStateRepositoryStub,
    ) -> None:
        state_repository.fail_on_save = True

        with capture_logs() as logs:
            with pytest.raises(OSError):
                service.schedule_regular_ga(DELEGATE, START, ASSEMBLY_LENGTH)

        failed = [e for e in logs if e["event"] == "assembly_state_save_failed"]
        assert len(failed) == 1
        assert failed[0]["error_type"] == "OSError"
        assert failed[0]["log_level"] == "error"
