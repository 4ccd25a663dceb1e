"""KeyValueEntry ORM — one row per stored key, value kept as the raw JSON text.

Invariants:
    - key is unique; writes are upserts that keep the original row id
    - value is opaque to the database (no JSON column, no schema)
    - Listing by prefix orders by id, i.e. first-insertion order

Design Decisions:
    - Surrogate integer id next to the unique key: gives a stable insertion
      order that survives overwrites
    - Text over JSON column: the store contract is string in, string out
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from decision_twin.db.base import Base


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class KeyValueEntry(Base):
    __tablename__ = "kv_entries"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    key: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    value: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utc_now, onupdate=_utc_now,
    )
