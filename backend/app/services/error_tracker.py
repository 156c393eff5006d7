"""
Mood Tracker Backend — Client Error Tracker
=============================================

What:  Receives error reports forwarded by the frontend's global error
       listeners and makes them visible server-side.
How:   Each report is logged on the `moodtracker.client` logger (WARNING or
       ERROR, matching the report's level) and kept in a bounded in-memory
       buffer that GET /api/errors reads back.
Who:   POST/GET /api/errors; /metrics reads the running total.

The buffer is per-process and lost on restart; the log stream is the
durable record.
"""

import logging
import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Deque, List, Optional

from app.config import settings
from app.middleware.request_id import request_id_var
from app.schemas.mood import ClientErrorAccepted, ClientErrorRecord, ClientErrorReport

logger = logging.getLogger("moodtracker.client")


class ErrorTracker:
    """Bounded store of recent client error reports."""

    def __init__(self, max_reports: int = 200):
        self.max_reports = max_reports
        self._reports: Deque[ClientErrorRecord] = deque(maxlen=max_reports)
        self._total = 0

    @property
    def total(self) -> int:
        """Reports received since startup (including ones evicted from the buffer)."""
        return self._total

    def record(self, report: ClientErrorReport, client_ip: Optional[str] = None) -> ClientErrorAccepted:
        rid = request_id_var.get("") or None
        record = ClientErrorRecord(
            **report.model_dump(),
            error_id=uuid.uuid4().hex[:12],
            received_at=datetime.now(timezone.utc),
            client_ip=client_ip,
            request_id=rid,
        )
        self._reports.append(record)
        self._total += 1

        logger.log(
            logging.WARNING if record.level == "warning" else logging.ERROR,
            "Client %s [%s] %s (source=%s, url=%s)",
            record.level,
            record.error_id,
            record.message,
            record.source or "unknown",
            record.url or "unknown",
            extra={
                "request_id": rid,
                "error_id": record.error_id,
                "client_ip": client_ip,
                "user_agent": record.user_agent,
            },
        )
        if record.stack:
            logger.debug("Client error %s stack:\n%s", record.error_id, record.stack)

        return ClientErrorAccepted(error_id=record.error_id, received_at=record.received_at)

    def recent(self, limit: int = 50) -> List[ClientErrorRecord]:
        """Most recent reports first."""
        if limit <= 0:
            return []
        return list(reversed(self._reports))[:limit]

    def clear(self) -> None:
        self._reports.clear()
        self._total = 0


error_tracker = ErrorTracker(max_reports=settings.error_buffer_size)
