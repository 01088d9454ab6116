"""
CSV Import Endpoints.

Templates to download, and upload of filled-in CSV files. ``dry_run=true``
only validates the rows and returns a preview.
"""

from __future__ import annotations

from typing import Literal, Union

from fastapi import APIRouter, File, HTTPException, Query, Response, UploadFile, status
from fastapi.responses import PlainTextResponse

from meridian.core.models.io.imports import ImportPreview, ImportResult
from meridian.files.csv_import import ISSUE_TEMPLATE, OBJECT_TEMPLATE
from meridian.server.api.cache_keys import invalidate, issue_keys, object_keys
from meridian.server.services.deps import SessionDep, UserIdDep
from meridian.server.services.imports import ImportService

router = APIRouter()

ImportKind = Literal["objects", "issues"]


@router.get(
    "/templates/{kind}",
    response_class=PlainTextResponse,
    summary="Download CSV Template",
    description="Header row plus one example row for the objects or issues import.",
)
async def download_template(kind: ImportKind) -> PlainTextResponse:
    template = OBJECT_TEMPLATE if kind == "objects" else ISSUE_TEMPLATE
    return PlainTextResponse(
        template,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{kind}-template.csv"'},
    )


@router.post(
    "/{kind}",
    response_model=Union[ImportPreview, ImportResult],
    summary="Import CSV",
    description="Validate and import objects or issues from an uploaded CSV file.",
    responses={400: {"description": "File is not UTF-8 text"}},
)
async def import_csv(
    kind: ImportKind,
    response: Response,
    session: SessionDep,
    user_id: UserIdDep,
    file: UploadFile = File(...),
    dry_run: bool = Query(default=False, description="Validate only and return a preview"),
) -> Union[ImportPreview, ImportResult]:
    """
    Import a CSV file.

    Rows failing validation are reported with their row number and skipped.
    Issue rows are attached to the object with the same name (case-insensitive).
    """
    try:
        text = (await file.read()).decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="CSV file must be UTF-8 encoded")

    service = ImportService(session)
    if dry_run:
        return service.preview(kind, text)

    if kind == "objects":
        result = await service.import_objects(user_id, text)
        invalidate(response, object_keys())
    else:
        result = await service.import_issues(user_id, text)
        invalidate(response, issue_keys())
    return result
