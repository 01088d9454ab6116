"""Global search across objects, issues, meetings and comments."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from meridian.core.database.entities import Comment, Issue, Meeting, TrackedObject
from meridian.core.database.repositories import (
    CommentRepository,
    IssueRepository,
    MeetingRepository,
    ObjectRepository,
)
from meridian.core.models.domain.enums import ISSUE_TYPE_LABELS, MODULE_LABELS, label_for
from meridian.core.models.io.search import SearchHit, SearchResults

# Hits returned per entity kind
SEARCH_LIMIT = 5
_SNIPPET_LENGTH = 60


def _snippet(text: str) -> str:
    return text if len(text) <= _SNIPPET_LENGTH else text[:_SNIPPET_LENGTH] + "..."


async def global_search(session: AsyncSession, user_id: str, term: str) -> SearchResults:
    """Case-insensitive substring search; a blank term matches nothing."""
    term = term.strip()
    if not term:
        return SearchResults()

    objects = await ObjectRepository(session).search(user_id, TrackedObject.name, term, SEARCH_LIMIT)
    issues = await IssueRepository(session).search(user_id, Issue.title, term, SEARCH_LIMIT)
    meetings = await MeetingRepository(session).search(user_id, Meeting.title, term, SEARCH_LIMIT)
    comments = await CommentRepository(session).search(user_id, Comment.body, term, SEARCH_LIMIT)

    return SearchResults(
        objects=[SearchHit(id=o.id, title=o.name, subtitle=label_for(MODULE_LABELS, o.module)) for o in objects],
        issues=[SearchHit(id=i.id, title=i.title, subtitle=label_for(ISSUE_TYPE_LABELS, i.issue_type)) for i in issues],
        meetings=[SearchHit(id=m.id, title=m.title, subtitle=m.meeting_date.isoformat()) for m in meetings],
        comments=[
            SearchHit(id=c.entity_id, title=_snippet(c.body), subtitle=f"Comment on {c.entity_type}") for c in comments
        ],
    )
