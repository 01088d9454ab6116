"""Aging and progress helpers for objects and issues."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Literal, Optional

from meridian.core.models.domain.enums import (
    ISSUE_AGING_THRESHOLDS,
    OBJECT_AGING_THRESHOLDS,
    STAGE_ORDER,
    AgingLevel,
    LifecycleStage,
)

_SECONDS_PER_DAY = 86400


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, matching the stored timestamps."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are taken as UTC already."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _whole_days(start: datetime, end: datetime) -> int:
    return math.floor((to_naive_utc(end) - to_naive_utc(start)).total_seconds() / _SECONDS_PER_DAY)


def compute_aging_days(stage_entered_at: datetime, now: Optional[datetime] = None) -> int:
    """Whole days an object has spent in its current stage."""
    return _whole_days(stage_entered_at, now or utc_now())


def compute_issue_age_days(
    created_at: datetime, resolved_at: Optional[datetime] = None, now: Optional[datetime] = None
) -> int:
    """Whole days an issue has been open; resolved issues stop aging at resolution."""
    return _whole_days(created_at, resolved_at or now or utc_now())


def get_aging_level(days: int, kind: Literal["object", "issue"]) -> AgingLevel:
    warning, critical = OBJECT_AGING_THRESHOLDS if kind == "object" else ISSUE_AGING_THRESHOLDS
    if days >= critical:
        return AgingLevel.critical
    if days >= warning:
        return AgingLevel.warning
    return AgingLevel.normal


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (e.g. 2.5 -> 3)."""
    return math.floor(value + 0.5)


def stage_index(stage: str | LifecycleStage | None) -> int:
    """Position of ``stage`` in the lifecycle, or -1 for unknown values."""
    try:
        return STAGE_ORDER.index(LifecycleStage(stage))
    except ValueError:
        return -1


def compute_progress_percent(stage: str | LifecycleStage) -> int:
    """Percent complete for a stage: the ninth stage (live) is 100."""
    index = stage_index(stage)
    if index < 0:
        return 0
    return round_half_up((index + 1) / len(STAGE_ORDER) * 100)
