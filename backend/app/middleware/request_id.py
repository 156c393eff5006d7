"""
Mood Tracker Backend — Request ID Middleware
==============================================

What:  Gives every request a correlation ID and echoes it in X-Request-ID.
How:   Reuses a well-formed X-Request-ID sent by the client (the frontend
       generates one per user action), otherwise generates a short UUID.
       The ID is stored in a ContextVar for loggers and in request.state
       for route handlers.

Every error body carries the same ID, so a user-visible error can be
matched to its server log lines, and frontend error reports posted to
/api/errors can be tied to the failing API call.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local storage for the current request ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Client-supplied IDs end up in log lines; accept only short, plain tokens
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

REQUEST_ID_HEADER = "X-Request-ID"


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns a request ID, exposes it to handlers/loggers, returns it in the response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        incoming = request.headers.get(REQUEST_ID_HEADER, "")
        rid = incoming if _VALID_REQUEST_ID.match(incoming) else new_request_id()

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
