"""Infrastructure Layer: storage backends and cross-cutting concerns.

Invariants:
    - Every backend satisfies a Protocol from core/repository_protocols.py
    - Backend failures are mapped to GradbookError subclasses (core/errors.py)
"""
