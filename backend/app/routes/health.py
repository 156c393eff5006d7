"""
Mood Tracker Backend — Health and Metrics Routes
==================================================

What:  GET /health for container healthchecks / load balancers, and
       GET /metrics for request counters.
How:   /health probes the database with SELECT 1 inside try/except and
       answers 200 (healthy) or 503 (unhealthy) so orchestrators stop
       routing traffic to an instance that cannot reach its database.
       /metrics combines the in-process request counters, the client
       error total, and the stored entry count.

Docker healthcheck:
    HEALTHCHECK CMD python -c "import urllib.request; urllib.request.urlopen('http://localhost:8000/health')"
"""

import logging

from fastapi import APIRouter, Response, status

from app import __version__
from app.config import settings
from app.database import async_session_factory, check_database
from app.schemas.mood import HealthResponse, MetricsResponse
from app.services.error_tracker import error_tracker
from app.services.metrics import metrics
from app.services.mood_service import mood_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await check_database()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    response.headers["Cache-Control"] = "no-store"
    return HealthResponse(
        status=overall,
        version=__version__,
        environment=settings.environment,
        database=db_status,
        uptime_seconds=metrics.uptime_seconds,
    )


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    summary="Request and usage metrics",
)
async def get_metrics() -> MetricsResponse:
    entries_total = None
    try:
        async with async_session_factory() as session:
            entries_total = await mood_service.count_entries(session)
    except Exception as e:
        logger.warning("Metrics: could not count mood entries: %s", str(e))

    return MetricsResponse(
        **metrics.snapshot(),
        client_errors_total=error_tracker.total,
        mood_entries_total=entries_total,
    )
