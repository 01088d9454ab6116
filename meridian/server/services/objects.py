"""
Service for tracked objects.

Owns the lifecycle rule that every change of ``current_stage`` restarts the
stage clock and appends a StageHistory row.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from meridian.core.database.entities import StageHistory, TrackedObject
from meridian.core.database.repositories import IssueRepository, ObjectRepository, StageHistoryRepository
from meridian.core.models.domain.enums import MODULE_CATEGORIES, ObjectStatus
from meridian.core.models.io.issues import IssueWithObject
from meridian.core.models.io.objects import ObjectCreate, ObjectUpdate, ObjectWithComputed
from meridian.tracking.aging import utc_now
from meridian.tracking.object_codes import compute_next_code

from .enrichment import enrich_issue, enrich_object
from .errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Columns that may not be set to null through an update
_REQUIRED_COLUMNS = {
    "name",
    "module",
    "category",
    "region",
    "source_system",
    "current_stage",
    "status",
    "is_archived",
}


class ObjectService:
    """Queries and mutations for tracked objects."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.objects = ObjectRepository(session)
        self.history = StageHistoryRepository(session)
        self.issues = IssueRepository(session)

    async def require(self, user_id: str, object_id: str) -> TrackedObject:
        obj = await self.objects.get_owned(object_id, user_id)
        if obj is None:
            raise NotFoundError("Object", object_id)
        return obj

    async def list_objects(
        self,
        user_id: str,
        module: Optional[str] = None,
        category: Optional[str] = None,
        status: Optional[str] = None,
        current_stage: Optional[str] = None,
        source_system: Optional[str] = None,
        region: Optional[str] = None,
        search: Optional[str] = None,
        is_archived: bool = False,
        sort: str = "created_at",
        order: str = "desc",
    ) -> List[ObjectWithComputed]:
        """
        List objects with computed aging, progress and open issue counts.

        ``sort="aging"`` orders by time in stage: descending aging is the
        oldest ``stage_entered_at`` first.
        """
        ascending = order == "asc"
        if sort == "aging":
            sort, ascending = "stage_entered_at", not ascending
        filters = {
            "module": module,
            "category": category,
            "status": status,
            "current_stage": current_stage,
            "source_system": source_system,
            "region": region,
            "is_archived": is_archived,
        }
        rows = await self.objects.list_objects(user_id, filters=filters, search=search, sort=sort, ascending=ascending)
        return await self._enrich(rows)

    async def _enrich(self, rows: List[TrackedObject]) -> List[ObjectWithComputed]:
        counts = await self.objects.open_issue_counts([row.id for row in rows])
        now = utc_now()
        return [enrich_object(row, counts.get(row.id, 0), now) for row in rows]

    async def get_object(self, user_id: str, object_id: str) -> ObjectWithComputed:
        obj = await self.require(user_id, object_id)
        return (await self._enrich([obj]))[0]

    async def get_objects(self, user_id: str, object_ids: List[str]) -> List[ObjectWithComputed]:
        rows = [row for row in await self.objects.get_many(object_ids) if row.user_id == user_id]
        return await self._enrich(rows)

    async def list_object_issues(self, user_id: str, object_id: str) -> List[IssueWithObject]:
        await self.require(user_id, object_id)
        now = utc_now()
        rows = await self.issues.list_for_object(object_id, user_id)
        return [enrich_issue(issue, name, module, now) for issue, name, module in rows]

    async def stage_history(self, user_id: str, object_id: str) -> List[StageHistory]:
        await self.require(user_id, object_id)
        return await self.history.list_for_object(object_id)

    async def all_stage_history(self, user_id: str) -> List[StageHistory]:
        return await self.history.list_for_user(user_id)

    async def object_names(self, user_id: str) -> List[TrackedObject]:
        return await self.objects.list_names(user_id)

    async def next_code(self, user_id: str, module: str, category: str) -> str:
        """Next suggested ``OBJ-<module>-<category>-NNN`` name for the user."""
        existing = await self.objects.list_names(user_id, include_archived=True)
        try:
            return compute_next_code([obj.name for obj in existing], module, category)
        except ValueError as e:
            raise ValidationError(str(e)) from e

    async def create_object(self, user_id: str, data: ObjectCreate) -> TrackedObject:
        now = utc_now()
        obj = TrackedObject(user_id=user_id, is_archived=False, stage_entered_at=now, **data.model_dump())
        obj = await self.objects.create(obj)
        await self.history.create(
            StageHistory(object_id=obj.id, from_stage=None, to_stage=obj.current_stage, transitioned_at=now)
        )
        logger.info(f"Created object {obj.id} ({obj.name}) for user {user_id}")
        return obj

    def _apply_changes(self, obj: TrackedObject, changes: Dict[str, Any], note: Optional[str] = None) -> None:
        previous_stage = obj.current_stage
        for key, value in changes.items():
            if value is None and key in _REQUIRED_COLUMNS:
                continue
            setattr(obj, key, value)

        allowed = MODULE_CATEGORIES.get(obj.module, [])
        if obj.category not in allowed:
            raise ValidationError(f"Category {obj.category!r} is not valid for module {obj.module!r}")

        if obj.current_stage != previous_stage:
            now = utc_now()
            obj.stage_entered_at = now
            self.session.add(
                StageHistory(
                    object_id=obj.id,
                    from_stage=previous_stage,
                    to_stage=obj.current_stage,
                    transitioned_at=now,
                    note=note,
                )
            )
            logger.debug(f"Object {obj.id} moved {previous_stage} -> {obj.current_stage}")

    async def update_object(self, user_id: str, object_id: str, data: ObjectUpdate) -> TrackedObject:
        obj = await self.require(user_id, object_id)
        changes = data.model_dump(exclude_unset=True)
        note = changes.pop("stage_note", None)
        self._apply_changes(obj, changes, note)
        return await self.objects.update(obj)

    async def bulk_update(self, user_id: str, ids: List[str], data: ObjectUpdate) -> List[TrackedObject]:
        """Apply one partial update to every listed object the user owns."""
        changes = data.model_dump(exclude_unset=True)
        note = changes.pop("stage_note", None)
        rows = [row for row in await self.objects.get_many(ids) if row.user_id == user_id]
        now = utc_now()
        try:
            for row in rows:
                self._apply_changes(row, changes, note)
                row.updated_at = now
                self.session.add(row)
        except ValidationError:
            await self.session.rollback()
            raise
        await self.session.commit()
        logger.info(f"Bulk updated {len(rows)} objects for user {user_id}")
        return rows

    async def restore_object(self, user_id: str, object_id: str) -> TrackedObject:
        """Bring an archived object back as on track."""
        obj = await self.require(user_id, object_id)
        obj.is_archived = False
        obj.status = ObjectStatus.on_track.value
        return await self.objects.update(obj)
