"""
Dashboard and Report Endpoints.

Read-only aggregations over the caller's active objects and non-closed issues.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query

from meridian.core.models.io.reports import DashboardStats, ReportBundle
from meridian.server.services.deps import SessionDep, UserIdDep
from meridian.server.services.reports import ReportService

router = APIRouter()


@router.get(
    "/dashboard",
    response_model=DashboardStats,
    summary="Dashboard Statistics",
    description="Totals, status breakdowns, stage pipeline, module summaries and recent activity.",
)
async def dashboard(session: SessionDep, user_id: UserIdDep) -> DashboardStats:
    return await ReportService(session).dashboard(user_id)


@router.get(
    "/reports",
    response_model=ReportBundle,
    summary="Reports",
    description="Module, stage and owner reports plus the weekly trend.",
    responses={400: {"description": "Unknown date range"}},
)
async def reports(
    session: SessionDep,
    user_id: UserIdDep,
    module: Optional[str] = None,
    date_range: str = Query(default="30d", description="7d, 30d, 90d or all"),
    group_by: str = Query(default="owner", pattern="^(owner|team)$"),
) -> ReportBundle:
    return await ReportService(session).reports(user_id, module=module, date_range=date_range, group_by=group_by)
