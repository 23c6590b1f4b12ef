"""Domain services for assembly governance.

Domain services contain business logic that doesn't naturally fit in entities
or value objects. They are pure and must NOT depend on infrastructure.

Available services:
- check_scheduling_time / is_valid_scheduling_time: assembly timing rules
- validate_duration: assembly duration bounds
- tally: delegate election tally
"""

from src.domain.services.duration_validator import validate_duration
from src.domain.services.interval_validator import (
    IntervalRules,
    check_scheduling_time,
    is_valid_scheduling_time,
    required_gap,
)
from src.domain.services.tally_engine import tally

__all__ = [
    "IntervalRules",
    "check_scheduling_time",
    "is_valid_scheduling_time",
    "required_gap",
    "tally",
    "validate_duration",
]
