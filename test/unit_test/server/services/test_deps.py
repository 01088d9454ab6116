"""Unit tests for server services dependencies.

Tests verify the ``X-User-Id`` dependency and that the Annotated dependency
aliases resolve to the expected providers.
"""

import pytest
from fastapi import FastAPI, HTTPException
from httpx import ASGITransport, AsyncClient

from meridian.core.database import get_session
from meridian.llm.email_polish import EmailPolisher
from meridian.llm.minutes import MinutesGenerator
from meridian.server.services.deps import (
    EmailPolisherDep,
    MinutesGeneratorDep,
    SessionDep,
    UserIdDep,
    get_current_user_id,
    get_email_polisher,
    get_minutes_generator,
)


class TestGetCurrentUserId:
    """Test the user header dependency."""

    @pytest.mark.asyncio
    async def test_returns_trimmed_user(self):
        assert await get_current_user_id("  user-123 ") == "user-123"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [None, "", "   "])
    async def test_missing_header(self, value):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user_id(value)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Missing X-User-Id header"


class TestDependencyAliases:
    """Test the Annotated dependency aliases."""

    @pytest.mark.parametrize(
        "alias, provider",
        [
            (SessionDep, get_session),
            (UserIdDep, get_current_user_id),
            (MinutesGeneratorDep, get_minutes_generator),
            (EmailPolisherDep, get_email_polisher),
        ],
    )
    def test_alias_uses_provider(self, alias, provider):
        assert hasattr(alias, "__metadata__")
        assert alias.__metadata__[0].dependency is provider

    def test_llm_providers(self):
        assert isinstance(get_minutes_generator(), MinutesGenerator)
        assert isinstance(get_email_polisher(), EmailPolisher)


class TestUserIdDepIntegration:
    """Test UserIdDep inside a FastAPI endpoint."""

    @pytest.mark.asyncio
    async def test_endpoint_reads_header(self):
        app = FastAPI()

        @app.get("/whoami")
        async def whoami(user_id: UserIdDep):
            return {"user_id": user_id}

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            ok = await client.get("/whoami", headers={"X-User-Id": "user-123"})
            missing = await client.get("/whoami")

        assert ok.json() == {"user_id": "user-123"}
        assert missing.status_code == 401
