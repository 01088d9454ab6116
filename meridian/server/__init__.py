"""
Meridian HTTP server.

FastAPI application exposing the internal JSON API under ``/api/v1`` and the
token-authenticated issues API under ``/issues-api``.
"""
