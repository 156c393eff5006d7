"""
Mood Tracker Backend — In-Process Request Metrics
===================================================

What:  Counters behind GET /metrics.
How:   RequestLoggingMiddleware calls `record()` once per request with the
       route template (e.g. /api/moods/{entry_id}), status code and duration.
       `snapshot()` copies the counters for the response.

Counters live in process memory: with several uvicorn workers each worker
reports its own numbers.
"""

import time
from collections import Counter
from typing import Any, Dict


class MetricsRegistry:
    """Request counters keyed by status code and route template."""

    def __init__(self):
        self.started_at = time.time()
        self.reset()

    def reset(self) -> None:
        self.requests_total = 0
        self.total_duration_ms = 0.0
        self.by_status: Counter = Counter()
        self.by_route: Counter = Counter()

    def record(self, method: str, route: str, status: int, duration_ms: float) -> None:
        self.requests_total += 1
        self.total_duration_ms += duration_ms
        self.by_status[str(status)] += 1
        self.by_route[f"{method} {route}"] += 1

    @property
    def uptime_seconds(self) -> float:
        return round(time.time() - self.started_at, 2)

    def snapshot(self) -> Dict[str, Any]:
        average = None
        if self.requests_total:
            average = round(self.total_duration_ms / self.requests_total, 2)
        return {
            "uptime_seconds": self.uptime_seconds,
            "requests_total": self.requests_total,
            "requests_by_status": dict(self.by_status),
            "requests_by_route": dict(self.by_route),
            "average_duration_ms": average,
        }


metrics = MetricsRegistry()
