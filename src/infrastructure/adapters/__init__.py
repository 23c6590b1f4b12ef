"""Infrastructure adapters for assembly governance.

Adapters implement the ports defined in the application layer,
providing concrete implementations for external services.
"""

from src.infrastructure.adapters.persistence import JsonFileAssemblyStateRepository

__all__: list[str] = ["JsonFileAssemblyStateRepository"]
