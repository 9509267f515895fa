"""StoredRecord ORM — one row per persisted key (projects, invoices, session).

Invariants:
    - key is the primary key; at most one row per StorageKey
    - value holds the WHOLE record (list for collections, object for session)
    - A missing row means "never written", which is distinct from value == []

Design Decisions:
    - JSON column over per-entity tables: every write replaces a whole
      collection, so row-level relations would buy nothing
    - Writers must assign a new list/dict to value; in-place mutation of the
      JSON value is not change-tracked
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from sitebook.db.base import Base


class StoredRecord(Base):
    """Key-value row backing the entity store."""
    __tablename__ = "stored_records"

    key: Mapped[str] = mapped_column(String(50), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
