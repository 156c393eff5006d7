"""
Mood Tracker Backend — Mood Entry SQLAlchemy Model
====================================================

What:  ORM model for the `mood_entries` table.
How:   Inherits from DeclarativeBase; Alembic reads this for migrations.
Who:   MoodService for CRUD/stats; Alembic for schema management.

Table Design:
    - UUID primary key (portable Uuid type: native on PostgreSQL,
      CHAR(32) on SQLite)
    - entry_date: the calendar day the mood refers to (not the insert time)
    - mood: one of MoodLabel, stored as a short string
    - intensity: 1..10, enforced by a CHECK constraint as well as the API
    - notes: optional free text
    - created_at / updated_at: UTC, timezone-aware

    Several entries may share the same entry_date (morning vs. evening
    check-ins), so there is no unique constraint on the date.
"""

import enum
import uuid
from datetime import date, datetime, timezone

from sqlalchemy import CheckConstraint, Date, DateTime, Index, SmallInteger, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

INTENSITY_MIN = 1
INTENSITY_MAX = 10


class MoodLabel(str, enum.Enum):
    """Enumerated emotions a user can pick for an entry."""

    HAPPY = "happy"
    EXCITED = "excited"
    GRATEFUL = "grateful"
    CALM = "calm"
    NEUTRAL = "neutral"
    TIRED = "tired"
    SAD = "sad"
    ANXIOUS = "anxious"
    STRESSED = "stressed"
    ANGRY = "angry"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MoodEntry(Base):
    """
    A single mood journal entry.

    Query Patterns:
        - Journal view: ORDER BY entry_date DESC, created_at DESC LIMIT n
          → idx_mood_entries_entry_date
        - Date range filter / stats: WHERE entry_date BETWEEN :from AND :to
        - Filter by mood: WHERE mood = :mood → idx_mood_entries_mood
    """

    __tablename__ = "mood_entries"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    entry_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="Calendar day the mood refers to",
    )

    mood: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="Mood label, one of MoodLabel",
    )

    intensity: Mapped[int] = mapped_column(
        SmallInteger,
        nullable=False,
        comment=f"Self-reported intensity, {INTENSITY_MIN}-{INTENSITY_MAX}",
    )

    notes: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    __table_args__ = (
        CheckConstraint(
            f"intensity BETWEEN {INTENSITY_MIN} AND {INTENSITY_MAX}",
            name="ck_mood_entries_intensity_range",
        ),
        CheckConstraint(
            "mood IN (" + ", ".join(f"'{label.value}'" for label in MoodLabel) + ")",
            name="ck_mood_entries_mood_label",
        ),
        Index("idx_mood_entries_entry_date", "entry_date"),
        Index("idx_mood_entries_mood", "mood"),
    )

    def __repr__(self) -> str:
        return (
            f"<MoodEntry(id={self.id}, entry_date='{self.entry_date}', "
            f"mood='{self.mood}', intensity={self.intensity})>"
        )
