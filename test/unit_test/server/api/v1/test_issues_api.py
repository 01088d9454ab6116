"""Tests for the issue endpoints."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

ISSUES_URL = "/api/v1/issues"


@pytest.fixture
async def object_id(client: AsyncClient) -> str:
    response = await client.post("/api/v1/objects", json={"name": "Customer Master", "module": "demand_planning"})
    return response.json()["id"]


async def _create_issue(client: AsyncClient, object_id: str, **overrides) -> dict:
    payload = {"object_id": object_id, "title": "Missing mapping", "issue_type": "mapping", "lifecycle_stage": "mapping"}
    payload.update(overrides)
    response = await client.post(ISSUES_URL, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateIssue:
    """Test POST /api/v1/issues."""

    async def test_create_open_issue(self, client: AsyncClient, object_id: str):
        response = await client.post(
            ISSUES_URL,
            json={"object_id": object_id, "title": "Gap", "issue_type": "mapping", "lifecycle_stage": "mapping"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "open"
        assert data["resolved_at"] is None
        assert response.headers["X-Invalidate"] == "issues,objects,object-issues"

    async def test_create_resolved_issue_is_stamped(self, client: AsyncClient, object_id: str):
        issue = await _create_issue(client, object_id, status="resolved")
        assert issue["resolved_at"] is not None

    async def test_unknown_object_is_rejected(self, client: AsyncClient):
        response = await client.post(
            ISSUES_URL,
            json={"object_id": "missing", "title": "Gap", "issue_type": "mapping", "lifecycle_stage": "mapping"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Object missing not found or does not belong to you"


class TestResolutionRule:
    """Test how status changes maintain resolved_at."""

    async def test_resolving_sets_resolved_at(self, client: AsyncClient, object_id: str):
        issue = await _create_issue(client, object_id)

        response = await client.patch(f"{ISSUES_URL}/{issue['id']}", json={"status": "resolved"})

        assert response.status_code == 200
        assert response.json()["resolved_at"] is not None
        assert response.headers["X-Invalidate"] == f"issues,objects,object-issues,issue:{issue['id']}"

    async def test_explicit_resolved_at_wins(self, client: AsyncClient, object_id: str):
        issue = await _create_issue(client, object_id)

        response = await client.patch(
            f"{ISSUES_URL}/{issue['id']}", json={"status": "closed", "resolved_at": "2025-01-15T09:30:00"}
        )

        assert response.json()["resolved_at"].startswith("2025-01-15T09:30:00")

    async def test_reopening_clears_resolved_at(self, client: AsyncClient, object_id: str):
        issue = await _create_issue(client, object_id, status="resolved")

        response = await client.patch(f"{ISSUES_URL}/{issue['id']}", json={"status": "in_progress"})

        assert response.json()["resolved_at"] is None

    async def test_terminal_to_terminal_keeps_timestamp(self, client: AsyncClient, object_id: str):
        issue = await _create_issue(client, object_id, status="resolved")

        response = await client.patch(f"{ISSUES_URL}/{issue['id']}", json={"status": "closed"})

        assert response.json()["resolved_at"] == issue["resolved_at"]


class TestListIssues:
    """Test GET /api/v1/issues."""

    async def test_closed_issues_hidden_by_default(self, client: AsyncClient, object_id: str):
        await _create_issue(client, object_id, title="Open one")
        await _create_issue(client, object_id, title="Closed one", status="closed")

        default = (await client.get(ISSUES_URL)).json()
        closed = (await client.get(ISSUES_URL, params={"status": "closed"})).json()
        both = (await client.get(ISSUES_URL, params={"status": "open,closed"})).json()

        assert [row["title"] for row in default] == ["Open one"]
        assert [row["title"] for row in closed] == ["Closed one"]
        assert len(both) == 2

    async def test_rows_carry_parent_object(self, client: AsyncClient, object_id: str):
        await _create_issue(client, object_id)

        row = (await client.get(ISSUES_URL)).json()[0]

        assert row["object_name"] == "Customer Master"
        assert row["object_module"] == "demand_planning"
        assert row["age_days"] == 0

    async def test_filter_by_module_and_search(self, client: AsyncClient, object_id: str):
        await _create_issue(client, object_id, title="Duplicate SKUs")
        await _create_issue(client, object_id, title="Missing plants")

        assert len((await client.get(ISSUES_URL, params={"module": "supply_planning"})).json()) == 0
        rows = (await client.get(ISSUES_URL, params={"search": "sku"})).json()
        assert [row["title"] for row in rows] == ["Duplicate SKUs"]

    async def test_object_issues(self, client: AsyncClient, object_id: str):
        await _create_issue(client, object_id)

        rows = (await client.get(f"/api/v1/objects/{object_id}/issues")).json()

        assert len(rows) == 1

    async def test_get_issue(self, client: AsyncClient, object_id: str):
        issue = await _create_issue(client, object_id)

        response = await client.get(f"{ISSUES_URL}/{issue['id']}")

        assert response.status_code == 200
        assert response.json()["object_name"] == "Customer Master"

    async def test_bulk_close(self, client: AsyncClient, object_id: str):
        first = await _create_issue(client, object_id)
        second = await _create_issue(client, object_id)

        response = await client.patch(
            f"{ISSUES_URL}/bulk", json={"ids": [first["id"], second["id"]], "updates": {"status": "closed"}}
        )

        assert response.status_code == 200
        assert all(row["resolved_at"] is not None for row in response.json())
