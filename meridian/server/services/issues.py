"""
Service for issues.

Owns the resolution rule: moving an issue into a terminal status without an
explicit ``resolved_at`` stamps it with the current time, and reopening clears it.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from meridian.core.database.entities import Issue
from meridian.core.database.repositories import IssueRepository, ObjectRepository
from meridian.core.models.domain.enums import TERMINAL_ISSUE_STATUSES, IssueStatus
from meridian.core.models.io.issues import IssueCreate, IssueUpdate, IssueWithObject
from meridian.tracking.aging import utc_now

from .enrichment import enrich_issue
from .errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

_REQUIRED_COLUMNS = {"object_id", "title", "issue_type", "lifecycle_stage", "status", "is_archived"}


class IssueService:
    """Queries and mutations for issues."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.issues = IssueRepository(session)
        self.objects = ObjectRepository(session)

    async def require(self, user_id: str, issue_id: str) -> Issue:
        issue = await self.issues.get_owned(issue_id, user_id)
        if issue is None:
            raise NotFoundError("Issue", issue_id)
        return issue

    async def _require_object(self, user_id: str, object_id: str) -> None:
        if await self.objects.get_owned(object_id, user_id) is None:
            raise ValidationError(f"Object {object_id} not found or does not belong to you")

    async def list_issues(
        self,
        user_id: str,
        status: Optional[str] = None,
        issue_type: Optional[str] = None,
        lifecycle_stage: Optional[str] = None,
        next_action: Optional[str] = None,
        module: Optional[str] = None,
        search: Optional[str] = None,
        is_archived: bool = False,
        sort: str = "created_at",
        order: str = "asc",
    ) -> List[IssueWithObject]:
        """
        List issues joined with their object.

        ``status`` is a comma-separated list; without it closed issues are left out.
        """
        statuses = [s.strip() for s in status.split(",") if s.strip()] if status else []
        rows = await self.issues.list_with_objects(
            user_id,
            statuses=statuses,
            exclude_statuses=[IssueStatus.closed.value],
            filters={
                "issue_type": issue_type,
                "lifecycle_stage": lifecycle_stage,
                "next_action": next_action,
                "is_archived": is_archived,
            },
            module=module,
            search=search,
            sort=sort,
            ascending=order != "desc",
        )
        now = utc_now()
        return [enrich_issue(issue, name, mod, now) for issue, name, mod in rows]

    async def get_issue(self, user_id: str, issue_id: str) -> IssueWithObject:
        row = await self.issues.get_with_object(issue_id, user_id)
        if row is None:
            raise NotFoundError("Issue", issue_id)
        issue, name, module = row
        return enrich_issue(issue, name, module)

    async def get_issues(self, user_id: str, issue_ids: List[str]) -> List[IssueWithObject]:
        if not issue_ids:
            return []
        rows = await self.issues.list_with_objects(user_id, filters={"id": issue_ids})
        now = utc_now()
        return [enrich_issue(issue, name, module, now) for issue, name, module in rows]

    async def create_issue(self, user_id: str, data: IssueCreate) -> Issue:
        await self._require_object(user_id, data.object_id)
        issue = Issue(user_id=user_id, is_archived=False, **data.model_dump())
        if issue.status in TERMINAL_ISSUE_STATUSES:
            issue.resolved_at = utc_now()
        issue = await self.issues.create(issue)
        logger.info(f"Created issue {issue.id} on object {issue.object_id}")
        return issue

    async def _apply_changes(self, user_id: str, issue: Issue, changes: Dict[str, Any]) -> None:
        if changes.get("object_id") and changes["object_id"] != issue.object_id:
            await self._require_object(user_id, changes["object_id"])

        was_terminal = issue.status in TERMINAL_ISSUE_STATUSES
        for key, value in changes.items():
            if value is None and key in _REQUIRED_COLUMNS:
                continue
            setattr(issue, key, value)

        is_terminal = issue.status in TERMINAL_ISSUE_STATUSES
        if "resolved_at" not in changes:
            if is_terminal and not was_terminal:
                issue.resolved_at = utc_now()
            elif was_terminal and not is_terminal:
                issue.resolved_at = None

    async def update_issue(self, user_id: str, issue_id: str, data: IssueUpdate) -> Issue:
        issue = await self.require(user_id, issue_id)
        await self._apply_changes(user_id, issue, data.model_dump(exclude_unset=True))
        return await self.issues.update(issue)

    async def bulk_update(self, user_id: str, ids: List[str], data: IssueUpdate) -> List[Issue]:
        """Apply one partial update to every listed issue the user owns."""
        changes = data.model_dump(exclude_unset=True)
        rows = [row for row in await self.issues.get_many(ids) if row.user_id == user_id]
        now = utc_now()
        try:
            for row in rows:
                await self._apply_changes(user_id, row, changes)
                row.updated_at = now
                self.session.add(row)
        except ValidationError:
            await self.session.rollback()
            raise
        await self.session.commit()
        logger.info(f"Bulk updated {len(rows)} issues for user {user_id}")
        return rows

    async def close_issue(self, user_id: str, issue_id: str, decision: str) -> Issue:
        issue = await self.require(user_id, issue_id)
        issue.status = IssueStatus.closed.value
        issue.decision = decision
        issue.resolved_at = utc_now()
        return await self.issues.update(issue)

    async def archive_issue(self, user_id: str, issue_id: str) -> Issue:
        issue = await self.require(user_id, issue_id)
        issue.is_archived = True
        return await self.issues.update(issue)

    async def restore_issue(self, user_id: str, issue_id: str) -> Issue:
        """Bring an archived issue back as open."""
        issue = await self.require(user_id, issue_id)
        await self._apply_changes(user_id, issue, {"is_archived": False, "status": IssueStatus.open.value})
        return await self.issues.update(issue)

    async def page(
        self, user_id: str, filters: Dict[str, Any], limit: int, offset: int
    ) -> List[Issue]:
        return await self.issues.page_for_owner(user_id, filters=filters, limit=limit, offset=offset)
