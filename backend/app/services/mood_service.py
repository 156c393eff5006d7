"""
Mood Tracker Backend — Mood Service (Business Logic)
======================================================

What:  CRUD operations and statistics for mood journal entries.
How:   Builds SQLAlchemy queries against MoodEntry and converts rows into
       response schemas. Missing rows become NotFoundError; driver failures
       become DatabaseError with the detail kept in the log.
Who:   Called by the /api/moods route handlers and the metrics endpoint.

MoodService is stateless: it receives the session for each call, so one
module-level instance serves every request.
"""

import logging
from datetime import date, datetime, timezone
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.mood_entry import MoodEntry, MoodLabel
from app.schemas.mood import (
    MoodEntryCreate,
    MoodEntryResponse,
    MoodEntryUpdate,
    MoodStatsResponse,
)

logger = logging.getLogger(__name__)

# Fields that may not be set to null through PATCH
_REQUIRED_FIELDS = ("entry_date", "mood", "intensity")


def _check_date_range(from_date: Optional[date], to_date: Optional[date]) -> None:
    if from_date and to_date and from_date > to_date:
        raise ValidationError(
            message="from_date must be on or before to_date",
            field="from_date",
            context={"from_date": from_date.isoformat(), "to_date": to_date.isoformat()},
        )


def _apply_filters(query, mood=None, from_date=None, to_date=None):
    if mood is not None:
        query = query.where(MoodEntry.mood == MoodLabel(mood).value)
    if from_date is not None:
        query = query.where(MoodEntry.entry_date >= from_date)
    if to_date is not None:
        query = query.where(MoodEntry.entry_date <= to_date)
    return query


class MoodService:
    """
    Business logic layer for mood entries.

    Responsibilities:
        - create_entry / get_entry / update_entry / delete_entry
        - list_entries(): filtered, newest-first listing with a total count
        - get_stats(): aggregate summary for a date range
        - count_entries(): total row count for /metrics
    """

    async def create_entry(self, db: AsyncSession, payload: MoodEntryCreate) -> MoodEntryResponse:
        """
        Store a new mood entry.

        The flush assigns defaults (id, timestamps) without committing;
        get_db_session commits once the route returns.

        Raises:
            DatabaseError: Insert failed
        """
        entry = MoodEntry(
            entry_date=payload.entry_date,
            mood=payload.mood.value,
            intensity=payload.intensity,
            notes=payload.notes,
        )
        try:
            db.add(entry)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating mood entry: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the mood entry. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info(
            "Mood entry created: %s (%s, intensity=%d, date=%s)",
            entry.id, entry.mood, entry.intensity, entry.entry_date,
        )
        return MoodEntryResponse.model_validate(entry)

    async def _load(self, db: AsyncSession, entry_id: UUID) -> MoodEntry:
        try:
            result = await db.execute(select(MoodEntry).where(MoodEntry.id == entry_id))
            entry = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching mood entry %s: %s", entry_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the mood entry. Please try again.",
                context={"entry_id": str(entry_id)},
            )

        if entry is None:
            raise NotFoundError(resource="mood entry", resource_id=str(entry_id))
        return entry

    async def get_entry(self, db: AsyncSession, entry_id: UUID) -> MoodEntryResponse:
        """
        Retrieve a single entry by ID.

        Raises:
            NotFoundError: No entry with that ID (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        entry = await self._load(db, entry_id)
        return MoodEntryResponse.model_validate(entry)

    async def list_entries(
        self,
        db: AsyncSession,
        limit: int = 50,
        offset: int = 0,
        mood: Optional[MoodLabel] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> Tuple[List[MoodEntryResponse], int]:
        """
        List entries, newest day first, with optional filters.

        Ordering is entry_date DESC then created_at DESC so several entries
        on one day show the latest check-in first.

        Returns:
            (entries on this page, total matching entries)

        Raises:
            ValidationError: from_date is after to_date
            DatabaseError: Query execution failed
        """
        _check_date_range(from_date, to_date)

        query = _apply_filters(select(MoodEntry), mood, from_date, to_date)
        query = (
            query.order_by(desc(MoodEntry.entry_date), desc(MoodEntry.created_at))
            .offset(offset)
            .limit(limit)
        )
        count_query = _apply_filters(select(func.count(MoodEntry.id)), mood, from_date, to_date)

        try:
            result = await db.execute(query)
            entries = list(result.scalars().all())

            count_result = await db.execute(count_query)
            total_count = count_result.scalar() or 0
        except SQLAlchemyError as e:
            logger.error("Database error listing mood entries: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve mood entries. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [MoodEntryResponse.model_validate(e) for e in entries], total_count

    async def update_entry(
        self,
        db: AsyncSession,
        entry_id: UUID,
        payload: MoodEntryUpdate,
    ) -> MoodEntryResponse:
        """
        Apply a partial update. Only fields present in the request body change.

        Raises:
            ValidationError: Empty update, or null for a required field
            NotFoundError: No entry with that ID
            DatabaseError: Update failed
        """
        changes = payload.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError(message="Update must change at least one field")

        for field in _REQUIRED_FIELDS:
            if field in changes and changes[field] is None:
                raise ValidationError(message=f"{field} cannot be null", field=field)

        entry = await self._load(db, entry_id)

        for field, value in changes.items():
            if isinstance(value, MoodLabel):
                value = value.value
            setattr(entry, field, value)
        entry.updated_at = datetime.now(timezone.utc)

        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating mood entry %s: %s", entry_id, str(e))
            raise DatabaseError(
                message="Could not update the mood entry. Please try again.",
                context={"entry_id": str(entry_id)},
            )

        logger.info("Mood entry %s updated: %s", entry_id, sorted(changes))
        return MoodEntryResponse.model_validate(entry)

    async def delete_entry(self, db: AsyncSession, entry_id: UUID) -> None:
        """
        Delete an entry.

        Raises:
            NotFoundError: No entry with that ID
            DatabaseError: Delete failed
        """
        entry = await self._load(db, entry_id)
        try:
            await db.delete(entry)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting mood entry %s: %s", entry_id, str(e))
            raise DatabaseError(
                message="Could not delete the mood entry. Please try again.",
                context={"entry_id": str(entry_id)},
            )
        logger.info("Mood entry %s deleted", entry_id)

    async def get_stats(
        self,
        db: AsyncSession,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> MoodStatsResponse:
        """
        Summarise entries in [from_date, to_date] (both optional, inclusive).

        Two queries: one aggregate row (count, average, first/last date) and
        one GROUP BY mood for the per-label counts.
        """
        _check_date_range(from_date, to_date)

        summary_query = _apply_filters(
            select(
                func.count(MoodEntry.id),
                func.avg(MoodEntry.intensity),
                func.min(MoodEntry.entry_date),
                func.max(MoodEntry.entry_date),
            ),
            from_date=from_date,
            to_date=to_date,
        )
        counts_query = _apply_filters(
            select(MoodEntry.mood, func.count(MoodEntry.id)).group_by(MoodEntry.mood),
            from_date=from_date,
            to_date=to_date,
        )

        try:
            summary = (await db.execute(summary_query)).one()
            counts = (await db.execute(counts_query)).all()
        except SQLAlchemyError as e:
            logger.error("Database error computing mood stats: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not compute mood statistics. Please try again.",
                context={"error_type": type(e).__name__},
            )

        total, average, first_date, last_date = summary
        mood_counts = {mood: count for mood, count in counts}

        most_common = None
        if mood_counts:
            # Highest count wins; ties go to the alphabetically first label
            most_common = min(mood_counts.items(), key=lambda item: (-item[1], item[0]))[0]

        return MoodStatsResponse(
            total_entries=total or 0,
            average_intensity=round(float(average), 2) if average is not None else None,
            mood_counts=mood_counts,
            most_common_mood=most_common,
            first_entry_date=first_date,
            last_entry_date=last_date,
        )

    async def count_entries(self, db: AsyncSession) -> int:
        """Total number of stored entries."""
        result = await db.execute(select(func.count(MoodEntry.id)))
        return result.scalar() or 0


# ── Singleton Instance ────────────────────────────────────────────────────
mood_service = MoodService()
