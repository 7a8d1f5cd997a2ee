"""Database Infrastructure: SQLAlchemy Base for the SQL storage backend.

Invariants:
    - Single engine per process (created by DatabaseSessionManager)
"""
