"""
Mood Tracker Backend — Pydantic Request/Response Schemas
==========================================================

What:  Pydantic models defining the API contract with the frontend.
How:   FastAPI validates request bodies against these, serializes responses
       through them, and builds the OpenAPI docs from them.

Schemas are separate from the SQLAlchemy model so the API contract can
evolve independently of the table (e.g. case-insensitive mood input,
whitespace-only notes normalised to null).
"""

import uuid
from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from app.models.mood_entry import INTENSITY_MAX, INTENSITY_MIN, MoodLabel

NOTES_MAX_LENGTH = 2000
USER_AGENT_MAX_LENGTH = 500


def _today_utc() -> date:
    return datetime.now(timezone.utc).date()


def _normalise_mood(v):
    # Accept "Happy" / " HAPPY " from hand-written clients
    if isinstance(v, str):
        return v.strip().lower()
    return v


def _normalise_notes(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    stripped = v.strip()
    return stripped or None


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class MoodEntryCreate(BaseModel):
    """
    What:  Body of POST /api/moods.

    entry_date defaults to today (UTC) so a quick check-in only needs a
    mood and an intensity.
    """
    entry_date: date = Field(
        default_factory=_today_utc,
        description="Day the mood refers to (ISO 8601 date). Defaults to today (UTC).",
    )
    mood: MoodLabel = Field(description="Mood label")
    intensity: int = Field(
        ge=INTENSITY_MIN,
        le=INTENSITY_MAX,
        description=f"How strong the mood is, {INTENSITY_MIN} (barely) to {INTENSITY_MAX} (overwhelming)",
    )
    notes: Optional[str] = Field(
        default=None,
        max_length=NOTES_MAX_LENGTH,
        description="Optional free-text journal note",
    )

    @field_validator("mood", mode="before")
    @classmethod
    def normalise_mood(cls, v):
        return _normalise_mood(v)

    @field_validator("notes")
    @classmethod
    def normalise_notes(cls, v: Optional[str]) -> Optional[str]:
        return _normalise_notes(v)


class MoodEntryUpdate(BaseModel):
    """
    What:  Body of PATCH /api/moods/{id}. Every field is optional; only the
           fields present in the body are changed.

    Sending `"notes": null` clears the note. An empty body is rejected by
    the service with a 400.
    """
    entry_date: Optional[date] = None
    mood: Optional[MoodLabel] = None
    intensity: Optional[int] = Field(default=None, ge=INTENSITY_MIN, le=INTENSITY_MAX)
    notes: Optional[str] = Field(default=None, max_length=NOTES_MAX_LENGTH)

    @field_validator("mood", mode="before")
    @classmethod
    def normalise_mood(cls, v):
        return _normalise_mood(v)

    @field_validator("notes")
    @classmethod
    def normalise_notes(cls, v: Optional[str]) -> Optional[str]:
        return _normalise_notes(v)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class MoodEntryResponse(BaseModel):
    """Full representation of a stored mood entry."""
    id: uuid.UUID = Field(description="Unique entry identifier (UUID)")
    entry_date: date
    mood: MoodLabel
    intensity: int
    notes: Optional[str] = None
    created_at: datetime = Field(description="When the entry was created (UTC)")
    updated_at: datetime = Field(description="When the entry was last changed (UTC)")

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # SQLite hands back naive datetimes for timezone-aware columns
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class MoodStatsResponse(BaseModel):
    """
    What:  Aggregate view over entries in an optional date range.
    Who:   Returned by GET /api/moods/stats for the dashboard summary.

    average_intensity and the date bounds are null when no entries match.
    """
    total_entries: int
    average_intensity: Optional[float] = None
    mood_counts: Dict[str, int] = Field(
        default_factory=dict,
        description="Number of entries per mood label (labels with no entries omitted)",
    )
    most_common_mood: Optional[MoodLabel] = Field(
        default=None,
        description="Mood with the most entries; ties resolved alphabetically",
    )
    first_entry_date: Optional[date] = None
    last_entry_date: Optional[date] = None


# ══════════════════════════════════════════════════════════════════════════
# Client Error Reporting
# ══════════════════════════════════════════════════════════════════════════


class ClientErrorReport(BaseModel):
    """
    What:  Body of POST /api/errors, sent by the frontend's global
           `window.onerror` / `unhandledrejection` listeners.
    """
    message: str = Field(min_length=1, max_length=1000)
    source: Optional[str] = Field(
        default=None, max_length=200,
        description="Component or module that raised the error",
    )
    stack: Optional[str] = Field(default=None, max_length=10000)
    url: Optional[str] = Field(default=None, max_length=2000, description="Page URL")
    user_agent: Optional[str] = Field(default=None, max_length=USER_AGENT_MAX_LENGTH)
    level: str = Field(default="error", description="error or warning")
    occurred_at: Optional[datetime] = Field(
        default=None, description="Client-side timestamp of the error",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        lower = v.strip().lower()
        if lower not in {"error", "warning"}:
            raise ValueError("level must be 'error' or 'warning'")
        return lower


class ClientErrorAccepted(BaseModel):
    """Acknowledgement returned with HTTP 202."""
    error_id: str
    received_at: datetime


class ClientErrorRecord(ClientErrorReport):
    """A stored client error report, as listed by GET /api/errors."""
    error_id: str
    received_at: datetime
    client_ip: Optional[str] = None
    request_id: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Operational Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "mood entry with ID '...' was not found",
            "details": null,
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for container healthchecks and load balancers."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    environment: str = Field(description="Value of ENVIRONMENT")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


class MetricsResponse(BaseModel):
    """Returned by GET /metrics."""
    uptime_seconds: float
    requests_total: int
    requests_by_status: Dict[str, int]
    requests_by_route: Dict[str, int]
    average_duration_ms: Optional[float] = None
    client_errors_total: int
    mood_entries_total: Optional[int] = Field(
        default=None, description="Null when the database could not be queried",
    )
