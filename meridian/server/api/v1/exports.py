"""
Excel Export Endpoints.

Each endpoint downloads a ``meridian-<kind>-YYYY-MM-DD.xlsx`` workbook.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, Response

from meridian.files.excel_export import XLSX_MEDIA_TYPE
from meridian.server.services.deps import SessionDep, UserIdDep
from meridian.server.services.exports import ExportFile, ExportService

router = APIRouter()


def _download(export: ExportFile) -> Response:
    filename, content = export
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/objects", summary="Export Objects", response_class=Response)
async def export_objects(session: SessionDep, user_id: UserIdDep, module: Optional[str] = None) -> Response:
    return _download(await ExportService(session).objects(user_id, module=module))


@router.get("/issues", summary="Export Issues", response_class=Response)
async def export_issues(
    session: SessionDep,
    user_id: UserIdDep,
    status_: Optional[str] = Query(default=None, alias="status", description="Comma-separated statuses"),
) -> Response:
    return _download(await ExportService(session).issues(user_id, status=status_))


@router.get(
    "/full",
    summary="Full Export",
    description="Objects per module, open and resolved issues, and a summary sheet.",
    response_class=Response,
)
async def export_full(session: SessionDep, user_id: UserIdDep) -> Response:
    return _download(await ExportService(session).full(user_id))


@router.get(
    "/reports",
    summary="Export Reports",
    description="Module, stage, owner and weekly-trend reports.",
    response_class=Response,
    responses={400: {"description": "Unknown date range"}},
)
async def export_reports(
    session: SessionDep,
    user_id: UserIdDep,
    module: Optional[str] = None,
    date_range: str = "30d",
    group_by: str = Query(default="owner", pattern="^(owner|team)$"),
) -> Response:
    return _download(
        await ExportService(session).reports(user_id, module=module, date_range=date_range, group_by=group_by)
    )
