"""Global Search Endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Query

from meridian.core.models.io.search import SearchResults
from meridian.server.services.deps import SessionDep, UserIdDep
from meridian.server.services.search import global_search

router = APIRouter()


@router.get(
    "/search",
    response_model=SearchResults,
    summary="Global Search",
    description="Up to five matches each among object names, issue titles, meeting titles and comment bodies.",
)
async def search(session: SessionDep, user_id: UserIdDep, q: str = Query(default="")) -> SearchResults:
    return await global_search(session, user_id, q)
