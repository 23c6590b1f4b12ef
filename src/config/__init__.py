"""Configuration module for assembly governance.

This module provides centralized configuration for system components.

Available Configurations:
- AssemblyConfig: GA scheduling windows, spacing and voting slots
"""

from src.config.assembly_config import (
    DEFAULT_ASSEMBLY_CONFIG,
    TEST_ASSEMBLY_CONFIG,
    AssemblyConfig,
)

__all__ = [
    "AssemblyConfig",
    "DEFAULT_ASSEMBLY_CONFIG",
    "TEST_ASSEMBLY_CONFIG",
]
