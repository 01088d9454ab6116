"""Build the computed read models from stored rows."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from meridian.core.database.entities import Issue, TrackedObject
from meridian.core.models.io.issues import IssueWithObject
from meridian.core.models.io.objects import ObjectWithComputed
from meridian.tracking.aging import compute_aging_days, compute_issue_age_days, compute_progress_percent


def enrich_object(obj: TrackedObject, open_issue_count: int, now: Optional[datetime] = None) -> ObjectWithComputed:
    return ObjectWithComputed.model_validate(
        {
            **obj.model_dump(),
            "aging_days": compute_aging_days(obj.stage_entered_at, now),
            "open_issue_count": open_issue_count,
            "progress_percent": compute_progress_percent(obj.current_stage),
        }
    )


def enrich_issue(
    issue: Issue, object_name: str, object_module: str, now: Optional[datetime] = None
) -> IssueWithObject:
    return IssueWithObject.model_validate(
        {
            **issue.model_dump(),
            "object_name": object_name,
            "object_module": object_module,
            "age_days": compute_issue_age_days(issue.created_at, issue.resolved_at, now),
        }
    )
