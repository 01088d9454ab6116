"""Unit tests for the issue repository."""

from __future__ import annotations

from datetime import datetime

import pytest

from meridian.core.database.entities import Issue, TrackedObject
from meridian.core.database.repositories import IssueRepository, ObjectRepository

pytestmark = pytest.mark.asyncio


@pytest.fixture
def repository(in_memory_session):
    return IssueRepository(in_memory_session)


@pytest.fixture
async def objects(in_memory_session, sample_object_data):
    repo = ObjectRepository(in_memory_session)
    dp = await repo.create(TrackedObject(**sample_object_data))
    sp = await repo.create(TrackedObject(**{**sample_object_data, "name": "Supply Plan", "module": "supply_planning"}))
    return dp, sp


class TestIssueRepository:
    """Tests for IssueRepository queries joined with the parent object."""

    async def test_rows_carry_object_name_and_module(self, repository, objects, sample_issue_data):
        dp, _ = objects
        issue = await repository.create(Issue(**sample_issue_data, object_id=dp.id))

        row = await repository.get_with_object(issue.id, "user-123")

        assert row == (issue, "Customer Master", "demand_planning")
        assert await repository.get_with_object(issue.id, "user-456") is None

    async def test_status_include_and_exclude(self, repository, objects, sample_issue_data):
        dp, _ = objects
        for status in ("open", "blocked", "closed"):
            await repository.create(Issue(**{**sample_issue_data, "title": status, "status": status}, object_id=dp.id))

        without_closed = await repository.list_with_objects("user-123", exclude_statuses=["closed"])
        only_closed = await repository.list_with_objects("user-123", statuses=["closed"], exclude_statuses=["closed"])

        assert sorted(issue.title for issue, _, _ in without_closed) == ["blocked", "open"]
        assert [issue.title for issue, _, _ in only_closed] == ["closed"]

    async def test_module_search_and_sort(self, repository, objects, sample_issue_data):
        dp, sp = objects
        await repository.create(
            Issue(**{**sample_issue_data, "title": "Late vendor file"}, object_id=dp.id, created_at=datetime(2025, 3, 2))
        )
        await repository.create(
            Issue(**{**sample_issue_data, "title": "Vendor mapping"}, object_id=dp.id, created_at=datetime(2025, 3, 1))
        )
        await repository.create(Issue(**{**sample_issue_data, "title": "Vendor plan"}, object_id=sp.id))

        rows = await repository.list_with_objects("user-123", module="demand_planning", search="vendor", ascending=True)

        assert [issue.title for issue, _, _ in rows] == ["Vendor mapping", "Late vendor file"]

    async def test_list_for_object_skips_archived(self, repository, objects, sample_issue_data):
        dp, _ = objects
        await repository.create(Issue(**sample_issue_data, object_id=dp.id))
        await repository.create(Issue(**{**sample_issue_data, "is_archived": True}, object_id=dp.id))

        rows = await repository.list_for_object(dp.id, "user-123")

        assert len(rows) == 1

    async def test_page_for_owner(self, repository, objects, sample_issue_data):
        dp, _ = objects
        for day in range(1, 6):
            await repository.create(
                Issue(**{**sample_issue_data, "title": f"Day {day}"}, object_id=dp.id, created_at=datetime(2025, 3, day))
            )
        await repository.create(Issue(**{**sample_issue_data, "is_archived": True}, object_id=dp.id))

        first = await repository.page_for_owner("user-123", limit=2)
        second = await repository.page_for_owner("user-123", limit=2, offset=2)
        filtered = await repository.page_for_owner("user-123", filters={"status": "blocked"})

        assert [issue.title for issue in first] == ["Day 5", "Day 4"]
        assert [issue.title for issue in second] == ["Day 3", "Day 2"]
        assert filtered == []

    async def test_search_is_owner_scoped(self, repository, objects, sample_issue_data):
        dp, _ = objects
        await repository.create(Issue(**sample_issue_data, object_id=dp.id))
        await repository.create(Issue(**{**sample_issue_data, "user_id": "user-456"}, object_id=dp.id))

        hits = await repository.search("user-123", Issue.title, "customer", limit=5)

        assert len(hits) == 1
