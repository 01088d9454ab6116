"""
Issues API for external tooling.

A small FastAPI application mounted under ``/issues-api``. Requests carry a
``Bearer mrd_...`` API token instead of the gateway's user header, and every
error is rendered as ``{"error": {"code": ..., "message": ...}}``.

The token is checked before anything else, including for unknown paths, so
an unauthenticated caller cannot discover which endpoints exist.

Endpoints:
- GET    /issues              list (status, issue_type, lifecycle_stage, object_id, limit, offset)
- POST   /issues              create
- GET    /issues/{id}         get
- PATCH  /issues/{id}         update
- DELETE /issues/{id}         archive
- POST   /issues/{id}/close   close with a decision
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Header, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from meridian.core.database import get_session
from meridian.core.database.entities import ApiToken, Issue
from meridian.core.logging_config import get_logger
from meridian.core.models.domain.enums import ApiTokenScope
from meridian.core.models.io.issues import IssueCreate, IssueRead, IssueUpdate
from meridian.server.core.config import settings
from meridian.server.services.api_tokens import ApiTokenService, require_scope
from meridian.server.services.errors import MeridianError, ValidationError
from meridian.server.services.issues import IssueService

logger = get_logger(__name__)

UNKNOWN_ENDPOINT_MESSAGE = (
    "Unknown endpoint. Available: GET/POST /issues, GET/PATCH/DELETE /issues/:id, POST /issues/:id/close"
)
REQUIRED_CREATE_FIELDS = ("title", "object_id", "lifecycle_stage", "issue_type")
UPDATABLE_FIELDS = (
    "title",
    "description",
    "issue_type",
    "lifecycle_stage",
    "status",
    "owner_alias",
    "raised_by_alias",
    "blocked_by_object_id",
    "blocked_by_note",
    "decision",
    "resolved_at",
)

issues_api = FastAPI(
    title="Meridian Issues API",
    description="Token-authenticated access to a user's issues.",
    version="1.0.0",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)


def error_response(code: str, message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": {"code": code, "message": message}})


@issues_api.exception_handler(MeridianError)
async def meridian_error_handler(request: Request, exc: MeridianError) -> JSONResponse:
    return error_response(exc.code, exc.message, exc.status_code)


@issues_api.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:]) or "request"
    return error_response("VALIDATION_ERROR", f"Invalid {field}: {first.get('msg', 'invalid value')}", 400)


@issues_api.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = "NOT_FOUND" if exc.status_code == status.HTTP_404_NOT_FOUND else "VALIDATION_ERROR"
    return error_response(code, str(exc.detail), exc.status_code)


@issues_api.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Issues API request failed: {request.method} {request.url.path}: {exc}", exc_info=True)
    return error_response("INTERNAL", f"Internal error: {exc}", 500)


# =====================================================================
# Dependencies
# =====================================================================


async def authenticated_token(
    authorization: Optional[str] = Header(default=None),
    session: AsyncSession = Depends(get_session),
) -> ApiToken:
    return await ApiTokenService(session).authenticate(authorization)


async def read_token(token: ApiToken = Depends(authenticated_token)) -> ApiToken:
    require_scope(token, ApiTokenScope.issues_read.value)
    return token


async def write_token(token: ApiToken = Depends(authenticated_token)) -> ApiToken:
    require_scope(token, ApiTokenScope.issues_write.value)
    return token


async def json_body(request: Request) -> Dict[str, Any]:
    try:
        body = await request.json()
    except ValueError:
        raise ValidationError("Invalid JSON body")
    if not isinstance(body, dict):
        raise ValidationError("Invalid JSON body")
    return body


def _validation_message(exc: PydanticValidationError) -> str:
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    return f"Invalid {field}: {first['msg']}"


def _data(issue: Issue) -> Dict[str, Any]:
    return IssueRead.model_validate(issue).model_dump(mode="json")


# =====================================================================
# Endpoints
# =====================================================================


@issues_api.get("/issues")
@issues_api.get("/", include_in_schema=False)
async def list_issues(
    token: ApiToken = Depends(read_token),
    session: AsyncSession = Depends(get_session),
    status_: Optional[str] = Query(default=None, alias="status"),
    issue_type: Optional[str] = None,
    lifecycle_stage: Optional[str] = None,
    object_id: Optional[str] = None,
    limit: Optional[int] = None,
    offset: int = 0,
):
    """
    List the token owner's non-archived issues, newest first.

    ``count`` is the number of issues on the returned page.
    """
    config = settings.api_tokens
    page_size = min(limit if limit is not None else config.default_limit, config.max_limit)
    rows = await IssueService(session).page(
        token.user_id,
        filters={
            "status": status_,
            "issue_type": issue_type,
            "lifecycle_stage": lifecycle_stage,
            "object_id": object_id,
        },
        limit=page_size,
        offset=offset,
    )
    return {"data": [_data(row) for row in rows], "count": len(rows)}


@issues_api.post("/issues", status_code=status.HTTP_201_CREATED)
@issues_api.post("/", status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_issue(
    token: ApiToken = Depends(write_token),
    body: Dict[str, Any] = Depends(json_body),
    session: AsyncSession = Depends(get_session),
):
    for field in REQUIRED_CREATE_FIELDS:
        if not body.get(field):
            raise ValidationError(f"Missing required field: {field}")

    fields = {key: value for key, value in body.items() if key in IssueCreate.model_fields and value not in ("", None)}
    try:
        data = IssueCreate(**fields)
    except PydanticValidationError as e:
        raise ValidationError(_validation_message(e)) from e

    issue = await IssueService(session).create_issue(token.user_id, data)
    return {"data": _data(issue)}


@issues_api.get("/issues/{issue_id}")
async def get_issue(
    issue_id: str,
    token: ApiToken = Depends(read_token),
    session: AsyncSession = Depends(get_session),
):
    issue = await IssueService(session).require(token.user_id, issue_id)
    return {"data": _data(issue)}


@issues_api.patch("/issues/{issue_id}")
async def update_issue(
    issue_id: str,
    token: ApiToken = Depends(write_token),
    body: Dict[str, Any] = Depends(json_body),
    session: AsyncSession = Depends(get_session),
):
    updates = {key: body[key] for key in UPDATABLE_FIELDS if key in body}
    if not updates:
        raise ValidationError("No valid fields to update")
    try:
        data = IssueUpdate(**updates)
    except PydanticValidationError as e:
        raise ValidationError(_validation_message(e)) from e

    issue = await IssueService(session).update_issue(token.user_id, issue_id, data)
    return {"data": _data(issue)}


@issues_api.post("/issues/{issue_id}/close")
async def close_issue(
    issue_id: str,
    token: ApiToken = Depends(write_token),
    body: Dict[str, Any] = Depends(json_body),
    session: AsyncSession = Depends(get_session),
):
    decision = body.get("decision")
    if not decision or not isinstance(decision, str):
        raise ValidationError("Missing required field: decision")
    issue = await IssueService(session).close_issue(token.user_id, issue_id, decision)
    return {"data": _data(issue)}


@issues_api.delete("/issues/{issue_id}")
async def archive_issue(
    issue_id: str,
    token: ApiToken = Depends(write_token),
    session: AsyncSession = Depends(get_session),
):
    issue = await IssueService(session).archive_issue(token.user_id, issue_id)
    return {"message": "Issue archived", "data": _data(issue)}


@issues_api.api_route(
    "/{path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def unknown_endpoint(path: str, token: ApiToken = Depends(authenticated_token)) -> JSONResponse:
    return error_response("NOT_FOUND", UNKNOWN_ENDPOINT_MESSAGE, status.HTTP_404_NOT_FOUND)
