"""
Service importing objects and issues from CSV text.

Valid rows are inserted in batches; a failing batch is reported and the
import moves on to the next one. Issues find their parent object by
case-insensitive name among the user's objects.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from meridian.core.database.entities import Issue, StageHistory, TrackedObject
from meridian.core.database.repositories import IssueRepository, ObjectRepository
from meridian.core.models.domain.enums import LifecycleStage, ObjectCategory, RegionType, SourceSystem
from meridian.core.models.io.imports import ImportPreview, ImportResult
from meridian.files.csv_import import batched, parse_csv, validate_issue_rows, validate_object_rows
from meridian.server.core.config import settings
from meridian.tracking.aging import utc_now

logger = logging.getLogger(__name__)


class ImportService:
    def __init__(self, session: AsyncSession, batch_size: Optional[int] = None):
        self.session = session
        self.batch_size = batch_size or settings.imports.batch_size
        self.objects = ObjectRepository(session)
        self.issues = IssueRepository(session)

    @staticmethod
    def preview(kind: str, text: str) -> ImportPreview:
        """Validate without writing anything."""
        rows = parse_csv(text).rows
        result = validate_object_rows(rows) if kind == "objects" else validate_issue_rows(rows)
        return ImportPreview(total_rows=len(rows), valid_rows=len(result.valid), errors=result.errors)

    async def _insert_batch(self, rows: List, number: int, failed: List[str]) -> int:
        try:
            self.session.add_all(rows)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.warning(f"Import batch {number} failed: {e}")
            failed.append(f"Batch {number}: {e}")
            return 0
        return len(rows)

    async def import_objects(self, user_id: str, text: str) -> ImportResult:
        rows = parse_csv(text).rows
        validation = validate_object_rows(rows)
        imported = 0
        failed: List[str] = []

        for number, batch in enumerate(batched(validation.valid, self.batch_size), start=1):
            now = utc_now()
            entities = [
                TrackedObject(
                    user_id=user_id,
                    name=row.name,
                    module=row.module,
                    status=row.status,
                    current_stage=row.lifecycle_stage or LifecycleStage.requirements.value,
                    stage_entered_at=now,
                    owner_alias=row.owner_alias,
                    description=row.description,
                    category=row.category or ObjectCategory.master_data.value,
                    region=row.region or RegionType.global_.value,
                    source_system=row.source_system or SourceSystem.other.value,
                    is_archived=False,
                )
                for row in batch
            ]
            count = await self._insert_batch(entities, number, failed)
            if count:
                history = [
                    StageHistory(object_id=obj.id, from_stage=None, to_stage=obj.current_stage, transitioned_at=now)
                    for obj in entities
                ]
                await self._insert_batch(history, number, failed)
            imported += count

        logger.info(f"Imported {imported} of {len(validation.valid)} valid object rows for user {user_id}")
        return ImportResult(
            total_rows=len(rows),
            imported=imported,
            failed=len(rows) - imported,
            errors=failed,
            validation_errors=validation.errors,
        )

    async def import_issues(self, user_id: str, text: str) -> ImportResult:
        rows = parse_csv(text).rows
        validation = validate_issue_rows(rows)
        by_name = {obj.name.lower(): obj.id for obj in await self.objects.list_names(user_id, include_archived=True)}
        imported = 0
        failed: List[str] = []

        for number, batch in enumerate(batched(validation.valid, self.batch_size), start=1):
            entities = []
            for row in batch:
                object_id = by_name.get(row.object_name.lower())
                if object_id is None:
                    failed.append(f'"{row.title}": No matching object found for "{row.object_name}"')
                    continue
                entities.append(
                    Issue(
                        user_id=user_id,
                        object_id=object_id,
                        title=row.title,
                        issue_type=row.issue_type,
                        lifecycle_stage=row.lifecycle_stage,
                        status=row.status,
                        next_action=row.next_action,
                        owner_alias=row.owner_alias,
                        description=row.description,
                        is_archived=False,
                    )
                )
            if entities:
                imported += await self._insert_batch(entities, number, failed)

        logger.info(f"Imported {imported} of {len(validation.valid)} valid issue rows for user {user_id}")
        return ImportResult(
            total_rows=len(rows),
            imported=imported,
            failed=len(rows) - imported,
            errors=failed,
            validation_errors=validation.errors,
        )
