"""
Mood Tracker Backend — Security Middleware
============================================

What:  Security response headers plus the one-call installer that wires
       host checking, CORS, compression and those headers onto the app.
Who:   create_app() calls install_security_middleware(app) once.

Headers added to every response:
    X-Content-Type-Options: nosniff
    X-Frame-Options: DENY
    Referrer-Policy: strict-origin-when-cross-origin
    Permissions-Policy: camera=(), microphone=(), geolocation=()
    Strict-Transport-Security (production only; TLS terminates at the host)
"""

import logging
from typing import Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.middleware.trustedhost import TrustedHostMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings

logger = logging.getLogger(__name__)

BASE_SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=()",
}

HSTS_HEADER = ("Strict-Transport-Security", "max-age=63072000; includeSubDomains")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Sets the security headers without overriding ones a route already set."""

    def __init__(self, app, enable_hsts: bool = False):
        super().__init__(app)
        self.headers = dict(BASE_SECURITY_HEADERS)
        if enable_hsts:
            self.headers[HSTS_HEADER[0]] = HSTS_HEADER[1]

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers.setdefault(name, value)
        return response


def install_security_middleware(app: FastAPI) -> None:
    """
    Register host checking, CORS, GZip and security headers.

    Middleware added later wraps middleware added earlier, so after this
    call requests pass: SecurityHeaders → GZip → CORS → TrustedHost → app.
    CORS therefore answers preflight requests only for allowed hosts.
    """
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.allowed_hosts_list or ["*"])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Total-Count", "Retry-After"],
    )

    # Small responses aren't worth compressing
    app.add_middleware(GZipMiddleware, minimum_size=500)

    app.add_middleware(SecurityHeadersMiddleware, enable_hsts=settings.is_production)

    logger.debug(
        "Security middleware installed (origins=%s, hosts=%s, hsts=%s)",
        settings.cors_origins_list,
        settings.allowed_hosts_list,
        settings.is_production,
    )
