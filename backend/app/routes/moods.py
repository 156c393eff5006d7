"""
Mood Tracker Backend — Mood Entry Route Handlers
==================================================

What:  CRUD endpoints for mood journal entries plus the stats summary.
How:   Extracts path/query/body data, delegates to MoodService, sets
       status codes and headers.
Who:   Called by the frontend journal, entry form and dashboard.

Endpoints:
    POST   /api/moods              create (201)
    GET    /api/moods              list (JSON array, X-Total-Count header)
    GET    /api/moods/stats        aggregate summary
    GET    /api/moods/{entry_id}   detail
    PATCH  /api/moods/{entry_id}   partial update
    DELETE /api/moods/{entry_id}   delete (204)
"""

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.models.mood_entry import MoodLabel
from app.schemas.mood import (
    ErrorResponse,
    MoodEntryCreate,
    MoodEntryResponse,
    MoodEntryUpdate,
    MoodStatsResponse,
)
from app.services.mood_service import mood_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Moods"])


@router.post(
    "/moods",
    status_code=status.HTTP_201_CREATED,
    response_model=MoodEntryResponse,
    responses={
        201: {"description": "Mood entry created", "model": MoodEntryResponse},
        422: {"description": "Invalid mood, intensity or date"},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Record a mood entry",
)
async def create_mood(
    payload: MoodEntryCreate,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> MoodEntryResponse:
    entry = await mood_service.create_entry(db=db, payload=payload)
    response.headers["Location"] = f"/api/moods/{entry.id}"
    return entry


@router.get(
    "/moods",
    response_model=List[MoodEntryResponse],
    responses={
        400: {"description": "Invalid date range", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List mood entries",
    description=(
        "Returns entries newest day first as a JSON array. The total number of "
        "matching entries is in the X-Total-Count header."
    ),
)
async def list_moods(
    response: Response,
    limit: int = Query(default=50, ge=1, le=200, description="Items per page (max 200)"),
    offset: int = Query(default=0, ge=0, description="Number of entries to skip"),
    mood: Optional[MoodLabel] = Query(default=None, description="Only entries with this mood"),
    from_date: Optional[date] = Query(default=None, description="Earliest entry date (inclusive)"),
    to_date: Optional[date] = Query(default=None, description="Latest entry date (inclusive)"),
    db: AsyncSession = Depends(get_db_session),
) -> List[MoodEntryResponse]:
    entries, total_count = await mood_service.list_entries(
        db=db,
        limit=limit,
        offset=offset,
        mood=mood,
        from_date=from_date,
        to_date=to_date,
    )
    response.headers["X-Total-Count"] = str(total_count)
    return entries


# Declared before /moods/{entry_id} so "stats" is not parsed as an ID
@router.get(
    "/moods/stats",
    response_model=MoodStatsResponse,
    responses={400: {"description": "Invalid date range", "model": ErrorResponse}},
    summary="Mood statistics for a date range",
)
async def mood_stats(
    from_date: Optional[date] = Query(default=None),
    to_date: Optional[date] = Query(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> MoodStatsResponse:
    return await mood_service.get_stats(db=db, from_date=from_date, to_date=to_date)


@router.get(
    "/moods/{entry_id}",
    response_model=MoodEntryResponse,
    responses={404: {"description": "Entry not found", "model": ErrorResponse}},
    summary="Get a single mood entry",
)
async def get_mood(
    entry_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> MoodEntryResponse:
    return await mood_service.get_entry(db=db, entry_id=entry_id)


@router.patch(
    "/moods/{entry_id}",
    response_model=MoodEntryResponse,
    responses={
        400: {"description": "Empty update or null required field", "model": ErrorResponse},
        404: {"description": "Entry not found", "model": ErrorResponse},
    },
    summary="Update a mood entry",
)
async def update_mood(
    entry_id: UUID,
    payload: MoodEntryUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> MoodEntryResponse:
    return await mood_service.update_entry(db=db, entry_id=entry_id, payload=payload)


@router.delete(
    "/moods/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Entry not found", "model": ErrorResponse}},
    summary="Delete a mood entry",
)
async def delete_mood(
    entry_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await mood_service.delete_entry(db=db, entry_id=entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
