"""Unit tests for the Meridian database layer.

Entities and repositories run against in-memory SQLite, so no external
database service is needed.
"""
