"""
Service gathering the data behind the dashboard and the reports.

The aggregation itself lives in ``meridian.tracking.reports``; this module
only loads the rows and resolves the report date range.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from meridian.core.models.io.issues import IssueWithObject
from meridian.core.models.io.meetings import MeetingRead
from meridian.core.models.io.objects import ObjectWithComputed, StageHistoryRead
from meridian.core.models.io.reports import DashboardStats, ReportBundle
from meridian.tracking.aging import utc_now
from meridian.tracking.reports import build_reports, dashboard_stats, filter_by_module

from .errors import ValidationError
from .issues import IssueService
from .meetings import MeetingService
from .objects import ObjectService

DATE_RANGES = {"7d": 7, "30d": 30, "90d": 90, "all": None}


def date_cutoff(date_range: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """Start of the reporting window for ``7d``/``30d``/``90d``; ``None`` for ``all``."""
    if date_range not in DATE_RANGES:
        raise ValidationError(f"Unknown date range {date_range!r}; expected one of {', '.join(DATE_RANGES)}")
    days = DATE_RANGES[date_range]
    if days is None:
        return None
    return (now or utc_now()) - timedelta(days=days)


@dataclass
class ReportData:
    objects: List[ObjectWithComputed]
    issues: List[IssueWithObject]
    stage_history: List[StageHistoryRead]


class ReportService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.objects = ObjectService(session)
        self.issues = IssueService(session)

    async def load(self, user_id: str, module: Optional[str] = None) -> ReportData:
        """Active objects, non-closed issues and all stage history, optionally for one module."""
        objects = await self.objects.list_objects(user_id)
        issues = await self.issues.list_issues(user_id)
        objects, issues = filter_by_module(objects, issues, module)
        history = [StageHistoryRead.model_validate(h) for h in await self.objects.all_stage_history(user_id)]
        return ReportData(objects=objects, issues=issues, stage_history=history)

    async def dashboard(self, user_id: str) -> DashboardStats:
        objects = await self.objects.list_objects(user_id)
        issues = await self.issues.list_issues(user_id)
        meetings = [MeetingRead.model_validate(m) for m in await MeetingService(self.session).list_meetings(user_id)]
        return dashboard_stats(objects, issues, meetings)

    async def reports(
        self, user_id: str, module: Optional[str] = None, date_range: str = "30d", group_by: str = "owner"
    ) -> ReportBundle:
        now = utc_now()
        data = await self.load(user_id, module)
        return build_reports(
            data.objects,
            data.issues,
            data.stage_history,
            cutoff=date_cutoff(date_range, now),
            group_by=group_by,
            now=now,
        )
