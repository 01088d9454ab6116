"""Tests for the meeting endpoints."""

from unittest.mock import patch

import pytest
from httpx import AsyncClient
from pydantic_ai.models.test import TestModel

from meridian.llm.minutes import MinutesGenerator
from meridian.server.core.config import GoogleConfig
from meridian.server.main import app
from meridian.server.services.deps import get_minutes_generator
from meridian.server.services.issues import IssueService

pytestmark = pytest.mark.asyncio

MEETINGS_URL = "/api/v1/meetings"


async def _create_meeting(client: AsyncClient, **overrides) -> dict:
    payload = {"title": "Weekly sync", "meeting_date": "2025-03-10", "transcript": "Sam: hello"}
    payload.update(overrides)
    response = await client.post(MEETINGS_URL, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def _create_object(client: AsyncClient, name: str = "Customer Master") -> str:
    response = await client.post("/api/v1/objects", json={"name": name, "module": "demand_planning"})
    return response.json()["id"]


class TestMeetingCrud:
    async def test_create_and_get_with_links(self, client: AsyncClient):
        object_id = await _create_object(client)
        meeting = await _create_meeting(client, linked_object_ids=[object_id])

        response = await client.get(f"{MEETINGS_URL}/{meeting['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["meeting_type"] == "full_mom"
        assert data["linked_object_names"] == ["Customer Master"]
        assert data["linked_issue_titles"] == []

    async def test_list_newest_first_with_search(self, client: AsyncClient):
        await _create_meeting(client, title="Kickoff", meeting_date="2025-01-01")
        await _create_meeting(client, title="Weekly sync", meeting_date="2025-03-10")

        rows = (await client.get(MEETINGS_URL)).json()
        searched = (await client.get(MEETINGS_URL, params={"search": "kick"})).json()

        assert [row["title"] for row in rows] == ["Weekly sync", "Kickoff"]
        assert [row["title"] for row in searched] == ["Kickoff"]

    async def test_update_and_delete(self, client: AsyncClient):
        meeting = await _create_meeting(client)

        updated = await client.patch(f"{MEETINGS_URL}/{meeting['id']}", json={"tldr": "All good"})
        deleted = await client.delete(f"{MEETINGS_URL}/{meeting['id']}")
        missing = await client.get(f"{MEETINGS_URL}/{meeting['id']}")

        assert updated.json()["tldr"] == "All good"
        assert deleted.status_code == 204
        assert deleted.headers["X-Invalidate"] == f"meetings,meeting:{meeting['id']}"
        assert missing.status_code == 404


class TestConvertToIssues:
    """Test POST /api/v1/meetings/{id}/convert-to-issues."""

    async def test_converts_into_existing_object(self, client: AsyncClient):
        object_id = await _create_object(client)
        meeting = await _create_meeting(client)

        response = await client.post(
            f"{MEETINGS_URL}/{meeting['id']}/convert-to-issues",
            json={
                "object_id": object_id,
                "entries": [{"action": "Send mapping file", "owner": "Sam"}, {"action": "   "}],
            },
        )

        assert response.status_code == 201
        result = response.json()
        assert result["object_id"] == object_id
        assert len(result["created_issue_ids"]) == 1
        assert result["linked_issue_ids"] == result["created_issue_ids"]

        issue = (await client.get(f"/api/v1/issues/{result['created_issue_ids'][0]}")).json()
        assert issue["title"] == "Send mapping file"
        assert issue["owner_alias"] == "Sam"

    async def test_links_are_appended(self, client: AsyncClient):
        object_id = await _create_object(client)
        meeting = await _create_meeting(client)
        url = f"{MEETINGS_URL}/{meeting['id']}/convert-to-issues"

        first = (await client.post(url, json={"object_id": object_id, "entries": [{"action": "A"}]})).json()
        second = (await client.post(url, json={"object_id": object_id, "entries": [{"action": "B"}, {"action": "C"}]})).json()

        assert second["linked_issue_ids"] == first["created_issue_ids"] + second["created_issue_ids"]
        stored = (await client.get(f"{MEETINGS_URL}/{meeting['id']}")).json()
        assert len(stored["linked_issue_titles"]) == 3

    async def test_creates_new_object_with_suggested_code(self, client: AsyncClient):
        meeting = await _create_meeting(client)

        response = await client.post(
            f"{MEETINGS_URL}/{meeting['id']}/convert-to-issues",
            json={
                "new_object": {"module": "demand_planning", "category": "master_data"},
                "entries": [{"action": "Profile source data"}],
            },
        )

        assert response.status_code == 201
        assert "objects" in response.headers["X-Invalidate"].split(",")
        obj = (await client.get(f"/api/v1/objects/{response.json()['object_id']}")).json()
        assert obj["name"] == "OBJ-DP-MD-001"

    async def test_blank_entries_only(self, client: AsyncClient):
        object_id = await _create_object(client)
        meeting = await _create_meeting(client)

        response = await client.post(
            f"{MEETINGS_URL}/{meeting['id']}/convert-to-issues",
            json={"object_id": object_id, "entries": [{"action": " "}]},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "No action items to convert"

    async def test_target_object_required(self, client: AsyncClient):
        meeting = await _create_meeting(client)

        response = await client.post(
            f"{MEETINGS_URL}/{meeting['id']}/convert-to-issues", json={"entries": [{"action": "A"}]}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Either object_id or new_object is required"

    async def test_new_object_category_must_fit_module(self, client: AsyncClient):
        meeting = await _create_meeting(client)

        response = await client.post(
            f"{MEETINGS_URL}/{meeting['id']}/convert-to-issues",
            json={
                "new_object": {"module": "demand_planning", "category": "priority_1"},
                "entries": [{"action": "Profile source data"}],
            },
        )

        assert response.status_code == 422
        assert (await client.get("/api/v1/objects")).json() == []

    async def test_failure_midway_keeps_earlier_issues_linked(self, client: AsyncClient):
        object_id = await _create_object(client)
        meeting = await _create_meeting(client)
        create_issue = IssueService.create_issue
        calls = []

        async def fail_on_second(self, user_id, data):
            calls.append(data.title)
            if len(calls) == 2:
                raise RuntimeError("database unavailable")
            return await create_issue(self, user_id, data)

        with patch.object(IssueService, "create_issue", fail_on_second):
            response = await client.post(
                f"{MEETINGS_URL}/{meeting['id']}/convert-to-issues",
                json={"object_id": object_id, "entries": [{"action": "A"}, {"action": "B"}, {"action": "C"}]},
            )

        assert response.status_code == 500
        assert response.json()["detail"] == "Created 1 of 3 issues before failing: database unavailable"
        assert calls == ["A", "B"]

        issues = (await client.get(f"/api/v1/objects/{object_id}/issues")).json()
        stored = (await client.get(f"{MEETINGS_URL}/{meeting['id']}")).json()
        assert [issue["title"] for issue in issues] == ["A"]
        assert stored["linked_issue_ids"] == [issues[0]["id"]]


class TestGenerateMinutes:
    """Test POST /api/v1/meetings/generate-minutes with an offline model."""

    async def test_generate(self, client: AsyncClient):
        config = GoogleConfig(api_key=None, minutes_model="fast-model", long_transcript_threshold=8000)
        model = TestModel(custom_output_args={"tldr": "Short sync", "next_steps": [{"action": "Ship it"}]})
        app.dependency_overrides[get_minutes_generator] = lambda: MinutesGenerator(model=model, config=config)

        response = await client.post(
            f"{MEETINGS_URL}/generate-minutes", json={"transcript": "Sam: ship it", "mode": "quick_summary"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["tldr"] == "Short sync"
        assert data["next_steps"] == [{"action": "Ship it", "owner": "TBD", "due_date": "TBD"}]
        assert data["model_used"] == "fast-model"

    async def test_empty_transcript(self, client: AsyncClient):
        app.dependency_overrides[get_minutes_generator] = lambda: MinutesGenerator(model=TestModel())

        response = await client.post(f"{MEETINGS_URL}/generate-minutes", json={"transcript": ""})

        assert response.status_code == 400
        assert response.json()["detail"] == "transcript is required"

    async def test_invalid_mode(self, client: AsyncClient):
        response = await client.post(f"{MEETINGS_URL}/generate-minutes", json={"transcript": "x", "mode": "poem"})
        assert response.status_code == 422


class TestTranscriptUpload:
    async def test_text_file(self, client: AsyncClient):
        response = await client.post(
            f"{MEETINGS_URL}/transcript", files={"file": ("notes.txt", b"Sam: hello", "text/plain")}
        )

        assert response.status_code == 200
        assert response.json() == {"filename": "notes.txt", "transcript": "Sam: hello"}

    async def test_empty_file(self, client: AsyncClient):
        response = await client.post(f"{MEETINGS_URL}/transcript", files={"file": ("notes.txt", b"", "text/plain")})

        assert response.status_code == 400
        assert response.json()["detail"] == "File is empty."
