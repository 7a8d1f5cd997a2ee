"""Storage Slot ORM: one row per key-value slot used by the SQL storage backend.

Invariants:
    - key is the primary key (one blob per key)
    - value holds the serialized collection verbatim, never parsed by the database
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gradbook.db.base import Base


class StorageSlot(Base):
    """A named blob; the graduate collection lives under a single key."""
    __tablename__ = "storage_slots"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
