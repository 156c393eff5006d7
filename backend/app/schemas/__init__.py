"""Pydantic request/response schemas (the HTTP API contract)."""
