"""JSON file adapter for assembly state persistence.

Stores the schedule, cursor, statute hash, convened proposals and the
in-flight candidacy round as one JSON document. Documents are validated
with pydantic on the way in and out; writes go to a temporary file that
then replaces the target, so a crash never leaves a half-written state.

Document shape:
    {
        "schema_version": 1,
        "cursor": 0,
        "total_scheduled": 2,
        "current_statute_hash": "ab12...",
        "convened_proposals": ["uuid", ...],
        "assemblies": [{"start_time": "...", "duration_seconds": 14400, ...}],
        "candidacy_round": {"total_participants": 3, "candidates": [...]}
    }
"""

from __future__ import annotations

import os
from datetime import datetime, timedelta
from pathlib import Path
from uuid import UUID

import structlog
from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.domain.models.assembly_schedule import AssemblySchedule
from src.domain.models.assembly_state import AssemblyState
from src.domain.models.candidacy_round import Candidate, CandidacyRound
from src.domain.models.general_assembly import AssemblyCategory, GeneralAssembly

logger = structlog.get_logger(__name__)

STATE_SCHEMA_VERSION = 1


class AssemblyDocument(BaseModel):
    """Serialized GeneralAssembly."""

    model_config = ConfigDict(frozen=True)

    start_time: datetime
    duration_seconds: float = Field(..., gt=0)
    category: AssemblyCategory
    current_end_watermark: datetime
    statute_hash: str | None = None
    delegate_election_time: datetime | None = None

    @classmethod
    def from_domain(cls, assembly: GeneralAssembly) -> AssemblyDocument:
        return cls(
            start_time=assembly.start_time,
            duration_seconds=assembly.duration.total_seconds(),
            category=assembly.category,
            current_end_watermark=assembly.current_end_watermark,
            statute_hash=assembly.statute_hash,
            delegate_election_time=assembly.delegate_election_time,
        )

    def to_domain(self) -> GeneralAssembly:
        return GeneralAssembly(
            start_time=self.start_time,
            duration=timedelta(seconds=self.duration_seconds),
            category=self.category,
            current_end_watermark=self.current_end_watermark,
            statute_hash=self.statute_hash,
            delegate_election_time=self.delegate_election_time,
        )


class CandidateDocument(BaseModel):
    """Serialized Candidate."""

    model_config = ConfigDict(frozen=True)

    identity: str = Field(..., min_length=1)
    supporting_vote_count: int = Field(0, ge=0)


class CandidacyRoundDocument(BaseModel):
    """Serialized open CandidacyRound."""

    model_config = ConfigDict(frozen=True)

    total_participants: int = Field(0, ge=0)
    candidates: list[CandidateDocument] = Field(default_factory=list)


class AssemblyStateDocument(BaseModel):
    """Top-level persisted document."""

    model_config = ConfigDict(frozen=True)

    schema_version: int = STATE_SCHEMA_VERSION
    cursor: int | None = None
    total_scheduled: int = Field(0, ge=0)
    current_statute_hash: str | None = None
    convened_proposals: list[UUID] = Field(default_factory=list)
    assemblies: list[AssemblyDocument] = Field(default_factory=list)
    candidacy_round: CandidacyRoundDocument | None = None

    @model_validator(mode="after")
    def check_consistency(self) -> AssemblyStateDocument:
        """Reject documents whose counters disagree with their content."""
        if self.schema_version != STATE_SCHEMA_VERSION:
            raise ValueError(
                f"unsupported schema_version {self.schema_version}, "
                f"expected {STATE_SCHEMA_VERSION}"
            )
        if self.total_scheduled != len(self.assemblies):
            raise ValueError(
                f"total_scheduled {self.total_scheduled} does not match "
                f"{len(self.assemblies)} assemblies"
            )
        return self

    @classmethod
    def from_domain(cls, state: AssemblyState) -> AssemblyStateDocument:
        schedule = state.schedule
        candidacy_round = None
        if state.candidacy_round is not None:
            candidacy_round = CandidacyRoundDocument(
                total_participants=state.candidacy_round.total_participants,
                candidates=[
                    CandidateDocument(
                        identity=candidate.identity,
                        supporting_vote_count=candidate.supporting_vote_count,
                    )
                    for candidate in state.candidacy_round.candidates
                ],
            )
        return cls(
            cursor=schedule.cursor,
            total_scheduled=schedule.total_scheduled,
            current_statute_hash=schedule.current_statute_hash,
            convened_proposals=sorted(schedule.convened_proposals, key=str),
            assemblies=[AssemblyDocument.from_domain(a) for a in schedule.records],
            candidacy_round=candidacy_round,
        )

    def to_domain(self) -> AssemblyState:
        schedule = AssemblySchedule(
            records=[document.to_domain() for document in self.assemblies],
            cursor=self.cursor,
            current_statute_hash=self.current_statute_hash,
            convened_proposals=self.convened_proposals,
        )
        candidacy_round = None
        if self.candidacy_round is not None:
            candidacy_round = CandidacyRound(
                candidates=[
                    Candidate(
                        identity=document.identity,
                        supporting_vote_count=document.supporting_vote_count,
                    )
                    for document in self.candidacy_round.candidates
                ],
                total_participants=self.candidacy_round.total_participants,
            )
        return AssemblyState(schedule=schedule, candidacy_round=candidacy_round)


class JsonFileAssemblyStateRepository:
    """AssemblyStateRepositoryProtocol backed by a single JSON file.

    Example:
        >>> repository = JsonFileAssemblyStateRepository(Path("/var/lib/ga/state.json"))
        >>> repository.save(state)
        >>> restored = repository.load()
    """

    def __init__(self, path: Path | str) -> None:
        """Initialize the repository.

        Args:
            path: File holding the state document. Parent directories are
                created on first save.
        """
        self._path = Path(path)
        self._log = logger.bind(component="assembly_state_repository", path=str(path))

    @property
    def path(self) -> Path:
        return self._path

    def save(self, state: AssemblyState) -> None:
        """Write the state document atomically."""
        document = AssemblyStateDocument.from_domain(state)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(f"{self._path.name}.tmp")
        tmp_path.write_text(document.model_dump_json(indent=2), encoding="utf-8")
        os.replace(tmp_path, self._path)
        self._log.debug(
            "assembly_state_saved",
            total_scheduled=document.total_scheduled,
            cursor=document.cursor,
        )

    def load(self) -> AssemblyState | None:
        """Read the state document.

        Returns:
            The stored state, or None if the file does not exist.

        Raises:
            pydantic.ValidationError: If the document is malformed.
            ScheduleOrderError: If the stored assemblies are out of order.
        """
        if not self._path.exists():
            return None
        document = AssemblyStateDocument.model_validate_json(
            self._path.read_text(encoding="utf-8")
        )
        self._log.info(
            "assembly_state_loaded",
            total_scheduled=document.total_scheduled,
            cursor=document.cursor,
        )
        return document.to_domain()
