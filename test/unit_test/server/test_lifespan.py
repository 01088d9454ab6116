"""
Unit tests for FastAPI application lifespan management.

Tests verify that the application startup and shutdown events are properly
handled, including database initialization.
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI

from meridian.server.main import lifespan

pytestmark = pytest.mark.asyncio


class TestLifespanStartup:
    """Test application startup lifespan events."""

    async def test_lifespan_startup_initializes_database(self):
        """Test that lifespan startup calls init_db."""
        with patch("meridian.server.main.init_db", new_callable=AsyncMock) as mock_init_db:
            async with lifespan(FastAPI()):
                mock_init_db.assert_called_once()

    async def test_lifespan_startup_logs_success(self):
        """Test that lifespan startup logs success message."""
        with (
            patch("meridian.server.main.init_db", new_callable=AsyncMock),
            patch("meridian.server.main.logger") as mock_logger,
        ):
            async with lifespan(FastAPI()):
                pass

        calls = [call[0][0] for call in mock_logger.info.call_args_list]
        assert any("Starting up" in call for call in calls)
        assert any("Database initialized successfully" in call for call in calls)

    async def test_lifespan_startup_handles_init_db_exception(self):
        """Test that lifespan startup handles init_db exceptions gracefully."""
        with (
            patch("meridian.server.main.init_db", new_callable=AsyncMock) as mock_init_db,
            patch("meridian.server.main.logger") as mock_logger,
        ):
            mock_init_db.side_effect = Exception("Database connection failed")

            async with lifespan(FastAPI()):
                pass

        mock_logger.error.assert_called_once()
        assert "Database initialization failed" in mock_logger.error.call_args[0][0]


class TestLifespanShutdown:
    async def test_lifespan_shutdown_logs_message(self):
        """Test that lifespan shutdown logs shutdown message."""
        with (
            patch("meridian.server.main.init_db", new_callable=AsyncMock),
            patch("meridian.server.main.logger") as mock_logger,
        ):
            async with lifespan(FastAPI()):
                assert not any("Shutting down" in call[0][0] for call in mock_logger.info.call_args_list)

        assert any("Shutting down" in call[0][0] for call in mock_logger.info.call_args_list)
