"""Test configuration for database unit tests.

This module provides common fixtures and utilities for testing the
database layer with in-memory SQLite.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel.pool import StaticPool

from meridian.core.database import create_all

USER_ID = "user-123"
OTHER_USER_ID = "user-456"


@pytest_asyncio.fixture(scope="function")
async def in_memory_engine() -> AsyncGenerator:
    """Create in-memory SQLite engine with every table created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def in_memory_session(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session for testing."""
    async_session = async_sessionmaker(in_memory_engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session


@pytest.fixture(scope="function")
def sample_object_data() -> dict:
    """Sample tracked object data for testing."""
    return {
        "user_id": USER_ID,
        "name": "Customer Master",
        "module": "demand_planning",
        "category": "master_data",
        "current_stage": "mapping",
        "status": "on_track",
        "owner_alias": "Sam",
    }


@pytest.fixture(scope="function")
def sample_issue_data() -> dict:
    """Sample issue data for testing; ``object_id`` is filled in by the test."""
    return {
        "user_id": USER_ID,
        "title": "Missing customer mapping",
        "issue_type": "mapping",
        "lifecycle_stage": "mapping",
        "status": "open",
    }


@pytest.fixture(scope="function")
def sample_api_token_data() -> dict:
    """Sample API token row for testing."""
    return {
        "user_id": USER_ID,
        "name": "CI",
        "token_hash": "a" * 64,
        "token_prefix": "mrd_aaaaaaaa...",
        "scopes": ["issues:read", "issues:write"],
        "expires_at": datetime(2030, 1, 1) + timedelta(days=1),
    }
