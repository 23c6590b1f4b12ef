"""General Assembly timing and election configuration.

This module defines the scheduling windows, spacing rules and voting slot
lengths for General Assemblies, with environment variable overrides for
production tuning. All durations are configured in whole seconds.

Environment Variables:
- GA_TIMESPAN_SECONDS: Regular GA lookahead (default: 730 days)
- GA_CLOSEST_FUTURE_SECONDS: Regular GA closest-future floor (default: 28 days)
- GA_MIN_INTERVAL_SECONDS: Spacing between regular GAs (default: 90 days)
- EXTRA_GA_TIMESPAN_SECONDS: Extraordinary GA lookahead (default: 180 days)
- EXTRA_GA_CLOSEST_FUTURE_SECONDS: Extraordinary GA floor (default: 7 days)
- EXTRA_GA_MIN_INTERVAL_SECONDS: Spacing between extraordinary GAs (default: 14 days)
- GA_MIN_INTERVAL_CROSS_SECONDS: Spacing between any two GAs (default: 7 days)
- GA_VOTING_DURATION_SECONDS: Length of one voting slot (default: 600)
- GA_INTER_PROPOSAL_GAP_SECONDS: Pause after each voting slot (default: 120)
- EXTRA_GA_DURATION_SECONDS: Duration of an extraordinary GA (default: 1 day)
- GA_MAX_DURATION_SECONDS: Longest allowed GA (default: 3 days)
- PROPOSAL_GATEWAY_IDENTITY: Identity of the proposal process (default: "proposal-gateway")
- ASSEMBLY_STATE_PATH: JSON state file; unset keeps state in memory
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta

from src.domain.models.general_assembly import AssemblyCategory
from src.domain.services.interval_validator import IntervalRules

_DAY = 24 * 60 * 60


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


# =============================================================================
# Regular GA windows
# =============================================================================

DEFAULT_GA_TIMESPAN_SECONDS = 730 * _DAY
DEFAULT_GA_CLOSEST_FUTURE_SECONDS = 28 * _DAY
DEFAULT_GA_MIN_INTERVAL_SECONDS = 90 * _DAY

# =============================================================================
# Extraordinary GA windows
# =============================================================================

DEFAULT_EXTRA_GA_TIMESPAN_SECONDS = 180 * _DAY
DEFAULT_EXTRA_GA_CLOSEST_FUTURE_SECONDS = 7 * _DAY
DEFAULT_EXTRA_GA_MIN_INTERVAL_SECONDS = 14 * _DAY

# Spacing between a regular and an extraordinary GA (and floor for all pairs)
DEFAULT_GA_MIN_INTERVAL_CROSS_SECONDS = 7 * _DAY

# =============================================================================
# Durations and voting slots
# =============================================================================

DEFAULT_EXTRA_GA_DURATION_SECONDS = 1 * _DAY
DEFAULT_GA_MAX_DURATION_SECONDS = 3 * _DAY
DEFAULT_VOTING_DURATION_SECONDS = 10 * 60
DEFAULT_INTER_PROPOSAL_GAP_SECONDS = 2 * 60

DEFAULT_PROPOSAL_GATEWAY_IDENTITY = "proposal-gateway"


@dataclass(frozen=True)
class AssemblyConfig:
    """Configuration for General Assembly scheduling and voting slots.

    All values can be overridden via environment variables for production
    tuning.

    Attributes:
        ga_timespan_seconds: How far ahead a regular GA may be scheduled.
        ga_closest_future_seconds: How soon a regular GA may be scheduled.
        ga_min_interval_seconds: Spacing required between regular GAs.
        extra_ga_timespan_seconds: How far ahead an extraordinary GA may be.
        extra_ga_closest_future_seconds: How soon an extraordinary GA may be.
        extra_ga_min_interval_seconds: Spacing between extraordinary GAs.
        min_interval_cross_seconds: Spacing required between any two GAs.
        voting_duration_seconds: Length of one voting slot.
        inter_proposal_gap_seconds: Pause booked after each slot.
        extra_ga_duration_seconds: Duration of an extraordinary GA.
        max_duration_seconds: Longest allowed GA. Must not exceed the cross
            interval so a GA never runs into a valid neighbor.
        proposal_gateway_identity: Caller authorized for slot and
            candidacy operations and for concluding elections.
        state_path: JSON file for persisted state, or None for in-memory.
    """

    ga_timespan_seconds: int = DEFAULT_GA_TIMESPAN_SECONDS
    ga_closest_future_seconds: int = DEFAULT_GA_CLOSEST_FUTURE_SECONDS
    ga_min_interval_seconds: int = DEFAULT_GA_MIN_INTERVAL_SECONDS
    extra_ga_timespan_seconds: int = DEFAULT_EXTRA_GA_TIMESPAN_SECONDS
    extra_ga_closest_future_seconds: int = DEFAULT_EXTRA_GA_CLOSEST_FUTURE_SECONDS
    extra_ga_min_interval_seconds: int = DEFAULT_EXTRA_GA_MIN_INTERVAL_SECONDS
    min_interval_cross_seconds: int = DEFAULT_GA_MIN_INTERVAL_CROSS_SECONDS
    voting_duration_seconds: int = DEFAULT_VOTING_DURATION_SECONDS
    inter_proposal_gap_seconds: int = DEFAULT_INTER_PROPOSAL_GAP_SECONDS
    extra_ga_duration_seconds: int = DEFAULT_EXTRA_GA_DURATION_SECONDS
    max_duration_seconds: int = DEFAULT_GA_MAX_DURATION_SECONDS
    proposal_gateway_identity: str = DEFAULT_PROPOSAL_GATEWAY_IDENTITY
    state_path: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        positive = {
            "ga_timespan_seconds": self.ga_timespan_seconds,
            "ga_closest_future_seconds": self.ga_closest_future_seconds,
            "ga_min_interval_seconds": self.ga_min_interval_seconds,
            "extra_ga_timespan_seconds": self.extra_ga_timespan_seconds,
            "extra_ga_closest_future_seconds": self.extra_ga_closest_future_seconds,
            "extra_ga_min_interval_seconds": self.extra_ga_min_interval_seconds,
            "min_interval_cross_seconds": self.min_interval_cross_seconds,
            "voting_duration_seconds": self.voting_duration_seconds,
            "extra_ga_duration_seconds": self.extra_ga_duration_seconds,
            "max_duration_seconds": self.max_duration_seconds,
        }
        for name, value in positive.items():
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.inter_proposal_gap_seconds < 0:
            raise ValueError(
                "inter_proposal_gap_seconds must be >= 0, "
                f"got {self.inter_proposal_gap_seconds}"
            )
        if self.ga_closest_future_seconds >= self.ga_timespan_seconds:
            raise ValueError(
                "ga_closest_future_seconds must be less than ga_timespan_seconds"
            )
        if self.extra_ga_closest_future_seconds >= self.extra_ga_timespan_seconds:
            raise ValueError(
                "extra_ga_closest_future_seconds must be less than "
                "extra_ga_timespan_seconds"
            )
        if self.max_duration_seconds > self.min_interval_cross_seconds:
            raise ValueError(
                f"max_duration_seconds ({self.max_duration_seconds}) must not exceed "
                f"min_interval_cross_seconds ({self.min_interval_cross_seconds})"
            )
        if self.extra_ga_duration_seconds > self.max_duration_seconds:
            raise ValueError(
                "extra_ga_duration_seconds must not exceed max_duration_seconds"
            )
        if self.voting_duration_seconds > self.extra_ga_duration_seconds:
            raise ValueError(
                "voting_duration_seconds must fit inside an extraordinary GA"
            )
        if not self.proposal_gateway_identity:
            raise ValueError("proposal_gateway_identity must not be empty")

    @property
    def voting_duration(self) -> timedelta:
        return timedelta(seconds=self.voting_duration_seconds)

    @property
    def inter_proposal_gap(self) -> timedelta:
        return timedelta(seconds=self.inter_proposal_gap_seconds)

    @property
    def slot_stride(self) -> timedelta:
        """Watermark advance per reserved slot (voting time plus gap)."""
        return self.voting_duration + self.inter_proposal_gap

    @property
    def extra_ga_duration(self) -> timedelta:
        return timedelta(seconds=self.extra_ga_duration_seconds)

    @property
    def max_duration(self) -> timedelta:
        return timedelta(seconds=self.max_duration_seconds)

    def interval_rules(self, category: AssemblyCategory) -> IntervalRules:
        """Get the scheduling rules for an assembly category.

        Args:
            category: REGULAR or EXTRAORDINARY.

        Returns:
            IntervalRules for the validator.
        """
        cross = timedelta(seconds=self.min_interval_cross_seconds)
        if category is AssemblyCategory.EXTRAORDINARY:
            return IntervalRules(
                timespan=timedelta(seconds=self.extra_ga_timespan_seconds),
                closest_future=timedelta(seconds=self.extra_ga_closest_future_seconds),
                min_interval=timedelta(seconds=self.extra_ga_min_interval_seconds),
                min_interval_cross=cross,
            )
        return IntervalRules(
            timespan=timedelta(seconds=self.ga_timespan_seconds),
            closest_future=timedelta(seconds=self.ga_closest_future_seconds),
            min_interval=timedelta(seconds=self.ga_min_interval_seconds),
            min_interval_cross=cross,
        )

    @classmethod
    def from_environment(cls) -> AssemblyConfig:
        """Create config from environment variables with defaults.

        Invalid integers fall back to their defaults; an inconsistent
        combination of values still raises ValueError.

        Returns:
            AssemblyConfig with values from environment or defaults.
        """
        return cls(
            ga_timespan_seconds=_get_int_env(
                "GA_TIMESPAN_SECONDS", DEFAULT_GA_TIMESPAN_SECONDS
            ),
            ga_closest_future_seconds=_get_int_env(
                "GA_CLOSEST_FUTURE_SECONDS", DEFAULT_GA_CLOSEST_FUTURE_SECONDS
            ),
            ga_min_interval_seconds=_get_int_env(
                "GA_MIN_INTERVAL_SECONDS", DEFAULT_GA_MIN_INTERVAL_SECONDS
            ),
            extra_ga_timespan_seconds=_get_int_env(
                "EXTRA_GA_TIMESPAN_SECONDS", DEFAULT_EXTRA_GA_TIMESPAN_SECONDS
            ),
            extra_ga_closest_future_seconds=_get_int_env(
                "EXTRA_GA_CLOSEST_FUTURE_SECONDS",
                DEFAULT_EXTRA_GA_CLOSEST_FUTURE_SECONDS,
            ),
            extra_ga_min_interval_seconds=_get_int_env(
                "EXTRA_GA_MIN_INTERVAL_SECONDS", DEFAULT_EXTRA_GA_MIN_INTERVAL_SECONDS
            ),
            min_interval_cross_seconds=_get_int_env(
                "GA_MIN_INTERVAL_CROSS_SECONDS", DEFAULT_GA_MIN_INTERVAL_CROSS_SECONDS
            ),
            voting_duration_seconds=_get_int_env(
                "GA_VOTING_DURATION_SECONDS", DEFAULT_VOTING_DURATION_SECONDS
            ),
            inter_proposal_gap_seconds=_get_int_env(
                "GA_INTER_PROPOSAL_GAP_SECONDS", DEFAULT_INTER_PROPOSAL_GAP_SECONDS
            ),
            extra_ga_duration_seconds=_get_int_env(
                "EXTRA_GA_DURATION_SECONDS", DEFAULT_EXTRA_GA_DURATION_SECONDS
            ),
            max_duration_seconds=_get_int_env(
                "GA_MAX_DURATION_SECONDS", DEFAULT_GA_MAX_DURATION_SECONDS
            ),
            proposal_gateway_identity=os.environ.get(
                "PROPOSAL_GATEWAY_IDENTITY", DEFAULT_PROPOSAL_GATEWAY_IDENTITY
            ),
            state_path=os.environ.get("ASSEMBLY_STATE_PATH") or None,
        )


# Pre-defined configurations for common use cases

# Default production config
DEFAULT_ASSEMBLY_CONFIG = AssemblyConfig()

# Testing config with round numbers that are easy to reason about
TEST_ASSEMBLY_CONFIG = AssemblyConfig(
    ga_timespan_seconds=365 * _DAY,
    ga_closest_future_seconds=10 * _DAY,
    ga_min_interval_seconds=30 * _DAY,
    extra_ga_timespan_seconds=90 * _DAY,
    extra_ga_closest_future_seconds=2 * _DAY,
    extra_ga_min_interval_seconds=10 * _DAY,
    min_interval_cross_seconds=3 * _DAY,
    voting_duration_seconds=10 * 60,
    inter_proposal_gap_seconds=5 * 60,
    extra_ga_duration_seconds=1 * 60 * 60,
    max_duration_seconds=1 * _DAY,
    proposal_gateway_identity=DEFAULT_PROPOSAL_GATEWAY_IDENTITY,
)
