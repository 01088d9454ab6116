"""
Client cache invalidation keys.

Every mutation response names the cached collections a client has to refetch
in the ``X-Invalidate`` header, as a comma-separated list.
"""

from typing import Iterable, Optional

from fastapi import Response

INVALIDATE_HEADER = "X-Invalidate"


def invalidate(response: Response, keys: Iterable[str]) -> None:
    response.headers[INVALIDATE_HEADER] = ",".join(dict.fromkeys(keys))


def object_keys(object_id: Optional[str] = None) -> list[str]:
    if object_id is None:
        return ["objects", "object-names"]
    return ["objects", f"object:{object_id}", f"stage-history:{object_id}"]


def issue_keys(issue_id: Optional[str] = None) -> list[str]:
    keys = ["issues", "objects", "object-issues"]
    if issue_id is not None:
        keys.append(f"issue:{issue_id}")
    return keys


def meeting_keys(meeting_id: Optional[str] = None) -> list[str]:
    return ["meetings"] if meeting_id is None else ["meetings", f"meeting:{meeting_id}"]


PIN_KEYS = ["pins", "pinned-objects", "pinned-issues"]
RECURRING_MEETING_KEYS = ["recurring-meetings", "schedule-occurrences"]
SCHEDULE_LOG_KEYS = ["schedule-occurrences"]
COMMENT_KEYS = ["comments"]
API_TOKEN_KEYS = ["api-tokens"]
