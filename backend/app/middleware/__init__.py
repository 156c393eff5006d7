"""
Mood Tracker Backend — Middleware Package
===========================================

Cross-cutting concerns applied to every request.

Middleware Chain (request direction):
    Request → [Request ID] → [Logging + Metrics] → [Security Headers]
            → [GZip] → [CORS] → [Trusted Host] → [Rate Limit] → Route Handler

    Responses travel back through the same chain in reverse, so the request
    ID header and security headers are on every response, and the logging
    middleware sees the final status code and duration.
"""
