"""Core Layer: pure domain logic, no IO, no DB, no web framework.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Validation and reporting functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
