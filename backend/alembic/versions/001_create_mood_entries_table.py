"""Create mood_entries table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `mood_entries` table and its indexes.
Rollback: downgrade() drops the table (all entries are lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MOOD_LABELS = (
    "happy", "excited", "grateful", "calm", "neutral",
    "tired", "sad", "anxious", "stressed", "angry",
)


def upgrade() -> None:
    op.create_table(
        "mood_entries",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "entry_date",
            sa.Date(),
            nullable=False,
            comment="Calendar day the mood refers to",
        ),
        sa.Column(
            "mood",
            sa.String(20),
            nullable=False,
            comment="Mood label, one of MoodLabel",
        ),
        sa.Column(
            "intensity",
            sa.SmallInteger(),
            nullable=False,
            comment="Self-reported intensity, 1-10",
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "intensity BETWEEN 1 AND 10",
            name="ck_mood_entries_intensity_range",
        ),
        sa.CheckConstraint(
            "mood IN (" + ", ".join(f"'{label}'" for label in MOOD_LABELS) + ")",
            name="ck_mood_entries_mood_label",
        ),
    )

    op.create_index("idx_mood_entries_entry_date", "mood_entries", ["entry_date"])
    op.create_index("idx_mood_entries_mood", "mood_entries", ["mood"])


def downgrade() -> None:
    op.drop_index("idx_mood_entries_mood", table_name="mood_entries")
    op.drop_index("idx_mood_entries_entry_date", table_name="mood_entries")
    op.drop_table("mood_entries")
