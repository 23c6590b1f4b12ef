"""
Infrastructure layer - External adapters for assembly governance.

This layer contains:
- JSON file adapter (assembly state persistence)
- Prometheus metrics collector
- structlog configuration
- In-memory stubs for the access and proposal registries

IMPORT RULES:
- CAN import from: domain, application
- Implements ports defined in application layer
"""

__all__: list[str] = []
