"""
Mood Tracker Backend — Request Logging Middleware
===================================================

What:  One structured access-log line per HTTP request, plus the request
       counters behind GET /metrics.
How:   Times the downstream call, picks a log level from the status code,
       and records method/route/status/duration in the metrics registry.
When:  Runs inside RequestIDMiddleware, so the request ID is available.

Log fields (also passed as `extra` for JSON formatters):
    request_id, method, path, route, status, duration_ms, client_ip

Request bodies are never logged: mood notes are private journal text.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var
from app.services.metrics import metrics

logger = logging.getLogger("moodtracker.access")

# Probed every few seconds by Docker / load balancers
QUIET_PATHS = {"/health"}


# Metrics key for requests no route matched (404 scans, 429s before routing)
UNMATCHED_ROUTE = "<unmatched>"


def _route_template(request: Request) -> str:
    """
    The matched route's path template (/api/moods/{entry_id}), or
    UNMATCHED_ROUTE. Templates keep the metrics keys bounded.
    """
    route = request.scope.get("route")
    template = getattr(route, "path", None)
    return template or UNMATCHED_ROUTE


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request/response and feeds the metrics registry."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        route = _route_template(request)

        metrics.record(method, route, status, duration_ms)

        if path in QUIET_PATHS and status < 400:
            return response

        # 5xx → ERROR, 4xx → WARNING, everything else → INFO
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "route": route,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
