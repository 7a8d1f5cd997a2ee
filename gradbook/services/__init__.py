"""Service Layer: orchestrates core rules around storage IO.

Invariants:
    - Services return OperationResult; they never raise to the API layer
"""
