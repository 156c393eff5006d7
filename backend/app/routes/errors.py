"""
Mood Tracker Backend — Client Error Reporting Routes
======================================================

What:  Endpoint the frontend's global error listeners post to, and a
       read-back of the most recent reports.
Who:   `window.addEventListener("error" | "unhandledrejection", ...)` in
       the React app; developers checking GET /api/errors.
"""

from typing import List

from fastapi import APIRouter, Query, Request, status

from app.schemas.mood import (
    USER_AGENT_MAX_LENGTH,
    ClientErrorAccepted,
    ClientErrorRecord,
    ClientErrorReport,
)
from app.services.error_tracker import error_tracker

router = APIRouter(prefix="/api", tags=["Errors"])


@router.post(
    "/errors",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=ClientErrorAccepted,
    summary="Report a frontend error",
)
async def report_error(report: ClientErrorReport, request: Request) -> ClientErrorAccepted:
    client_ip = request.client.host if request.client else None
    if report.user_agent is None:
        user_agent = request.headers.get("user-agent")
        if user_agent:
            report.user_agent = user_agent[:USER_AGENT_MAX_LENGTH]
    return error_tracker.record(report, client_ip=client_ip)


@router.get(
    "/errors",
    response_model=List[ClientErrorRecord],
    summary="List recent frontend error reports",
)
async def list_errors(
    limit: int = Query(default=50, ge=1, le=200),
) -> List[ClientErrorRecord]:
    return error_tracker.recent(limit=limit)
