"""Persistence adapters for assembly state."""

from src.infrastructure.adapters.persistence.json_file_state_repository import (
    AssemblyStateDocument,
    JsonFileAssemblyStateRepository,
)

__all__: list[str] = ["AssemblyStateDocument", "JsonFileAssemblyStateRepository"]
