"""
Service assembling the Excel exports.

Each export returns the download file name and the workbook bytes.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from meridian.core.models.domain.enums import IssueStatus
from meridian.files.excel_export import (
    build_full_workbook,
    build_issues_workbook,
    build_objects_workbook,
    build_reports_workbook,
    export_filename,
    workbook_bytes,
)

from .issues import IssueService
from .objects import ObjectService
from .reports import ReportService

logger = logging.getLogger(__name__)

ExportFile = Tuple[str, bytes]

# The full export covers closed issues too
ALL_ISSUE_STATUSES = ",".join(s.value for s in IssueStatus)


class ExportService:
    def __init__(self, session: AsyncSession, today: Optional[date] = None):
        self.session = session
        self.today = today

    async def objects(self, user_id: str, module: Optional[str] = None) -> ExportFile:
        rows = await ObjectService(self.session).list_objects(user_id, module=module)
        logger.info(f"Exporting {len(rows)} objects for user {user_id}")
        return export_filename("objects", self.today), workbook_bytes(build_objects_workbook(rows))

    async def issues(self, user_id: str, status: Optional[str] = None) -> ExportFile:
        rows = await IssueService(self.session).list_issues(user_id, status=status)
        logger.info(f"Exporting {len(rows)} issues for user {user_id}")
        return export_filename("issues", self.today), workbook_bytes(build_issues_workbook(rows))

    async def full(self, user_id: str) -> ExportFile:
        objects = await ObjectService(self.session).list_objects(user_id)
        issues = await IssueService(self.session).list_issues(user_id, status=ALL_ISSUE_STATUSES)
        logger.info(f"Exporting {len(objects)} objects and {len(issues)} issues for user {user_id}")
        return export_filename("full-export", self.today), workbook_bytes(build_full_workbook(objects, issues))

    async def reports(
        self, user_id: str, module: Optional[str] = None, date_range: str = "30d", group_by: str = "owner"
    ) -> ExportFile:
        bundle = await ReportService(self.session).reports(user_id, module=module, date_range=date_range, group_by=group_by)
        return export_filename("reports", self.today), workbook_bytes(build_reports_workbook(bundle))
