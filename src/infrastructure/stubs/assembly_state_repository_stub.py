"""In-memory stub implementation of AssemblyStateRepositoryProtocol.

Keeps the last saved state object and counts saves. Not intended for
production use; see JsonFileAssemblyStateRepository for durable storage.
"""

from __future__ import annotations

from src.domain.models.assembly_state import AssemblyState


class AssemblyStateRepositoryStub:
    """In-memory implementation of AssemblyStateRepositoryProtocol."""

    def __init__(self, initial: AssemblyState | None = None) -> None:
        self._state = initial
        self.save_count = 0
        self.fail_on_save = False

    def save(self, state: AssemblyState) -> None:
        """Keep ``state`` as the saved snapshot.

        Raises:
            OSError: If fail_on_save is set, simulating unavailable storage.
        """
        if self.fail_on_save:
            raise OSError("state storage unavailable")
        self._state = state
        self.save_count += 1

    def load(self) -> AssemblyState | None:
        return self._state
