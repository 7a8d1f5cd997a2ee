"""Pydantic Schemas: request/response shapes for API endpoints.

Invariants:
    - Schemas check shape at the system boundary; admission rules live in core/
    - Wire names are camelCase, matching the persisted record layout

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
