"""
Application layer - Use cases and orchestration for assembly governance.

This layer contains:
- Application services (scheduling, slots, candidacy, elections, lifecycle)
- Port definitions (abstract interfaces for collaborators and infrastructure)

IMPORT RULES:
- CAN import from: domain, config
- CANNOT import from: infrastructure, bootstrap
"""
