"""
Assembly Governance - General Assembly scheduling and delegate elections

Schedules regular and extraordinary General Assemblies for a
member-governed organization, books proposal voting slots inside each
assembly, and tallies single-delegate elections under quorum and
majority rules.

Operating rules:
- The schedule is always strictly ordered by start time
- A rejected operation leaves no trace in state
- A candidacy round is concluded exactly once
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
