"""Tests for comments and pins on objects and issues."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


@pytest.fixture
async def object_id(client: AsyncClient) -> str:
    response = await client.post("/api/v1/objects", json={"name": "Customer Master", "module": "demand_planning"})
    return response.json()["id"]


class TestComments:
    async def test_add_and_list(self, client: AsyncClient, object_id: str):
        first = await client.post(
            "/api/v1/comments", json={"entity_type": "object", "entity_id": object_id, "body": "First"}
        )
        await client.post(
            "/api/v1/comments",
            json={"entity_type": "object", "entity_id": object_id, "body": "Second", "author_alias": "Sam"},
        )

        rows = (
            await client.get("/api/v1/comments", params={"entity_type": "object", "entity_id": object_id})
        ).json()

        assert first.status_code == 201
        assert first.headers["X-Invalidate"] == "comments"
        assert [row["body"] for row in rows] == ["Second", "First"]
        assert rows[0]["author_alias"] == "Sam"

    async def test_comment_on_missing_issue(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/comments", json={"entity_type": "issue", "entity_id": "missing", "body": "Hello"}
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Issue missing not found"

    async def test_blank_body_rejected(self, client: AsyncClient, object_id: str):
        response = await client.post(
            "/api/v1/comments", json={"entity_type": "object", "entity_id": object_id, "body": ""}
        )
        assert response.status_code == 422


class TestPins:
    async def test_toggle_pins_and_unpins(self, client: AsyncClient, object_id: str):
        payload = {"entity_type": "object", "entity_id": object_id}

        pinned = await client.post("/api/v1/pins/toggle", json=payload)
        status_after_pin = (await client.get("/api/v1/pins/status", params=payload)).json()
        unpinned = await client.post("/api/v1/pins/toggle", json=payload)

        assert pinned.json() == {**payload, "pinned": True}
        assert pinned.headers["X-Invalidate"] == "pins,pinned-objects,pinned-issues"
        assert status_after_pin["pinned"] is True
        assert unpinned.json()["pinned"] is False
        assert (await client.get("/api/v1/pins")).json() == []

    async def test_pinned_objects_and_issues(self, client: AsyncClient, object_id: str):
        issue = await client.post(
            "/api/v1/issues",
            json={"object_id": object_id, "title": "Gap", "issue_type": "mapping", "lifecycle_stage": "mapping"},
        )
        await client.post("/api/v1/pins/toggle", json={"entity_type": "object", "entity_id": object_id})
        await client.post("/api/v1/pins/toggle", json={"entity_type": "issue", "entity_id": issue.json()["id"]})

        objects = (await client.get("/api/v1/pins/objects")).json()
        issues = (await client.get("/api/v1/pins/issues")).json()

        assert [row["id"] for row in objects] == [object_id]
        assert objects[0]["open_issue_count"] == 1
        assert [row["title"] for row in issues] == ["Gap"]

    async def test_cannot_pin_missing_object(self, client: AsyncClient):
        response = await client.post("/api/v1/pins/toggle", json={"entity_type": "object", "entity_id": "missing"})
        assert response.status_code == 404
