import os
from typing import AsyncGenerator
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel.pool import StaticPool

# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Set test database URL before importing app
os.environ["DATABASE_URL"] = TEST_DATABASE_URL

TEST_USER_ID = "user-123"
OTHER_USER_ID = "user-456"


@pytest.fixture
def user_headers() -> dict:
    return {"X-User-Id": TEST_USER_ID}


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database for each test."""
    from meridian.core.database import create_all

    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async_session_maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session_maker() as session:
        yield session


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession, user_headers: dict) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with mocked lifespan and overridden dependencies.

    The client sends the gateway user header by default; delete it from
    ``client.headers`` to call anonymously.
    """
    from meridian.core.database import get_session
    from meridian.server.api.external import issues_api
    from meridian.server.main import app

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    # The mounted issues API resolves its dependencies on its own app
    app.dependency_overrides[get_session] = get_session_override
    issues_api.dependency_overrides[get_session] = get_session_override

    # Mock the lifespan to prevent database initialization during tests
    async def mock_lifespan(app):
        yield

    with patch("meridian.server.main.lifespan", mock_lifespan):
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://localhost", headers=user_headers
        ) as client:
            yield client

    app.dependency_overrides.clear()
    issues_api.dependency_overrides.clear()
