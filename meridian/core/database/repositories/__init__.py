"""
Repository layer: one data-access class per table, all built on
``SqlRepository`` from ``base``.
"""

from .api_tokens import ApiTokenRepository
from .base import AsyncBaseRepository, QueryBuilder, SqlRepository
from .comments import CommentRepository, PinRepository
from .issues import IssueRepository
from .meetings import MeetingRepository
from .objects import ObjectRepository, StageHistoryRepository
from .schedule import RecurringMeetingRepository, ScheduleLogRepository

__all__ = [
    "ApiTokenRepository",
    "AsyncBaseRepository",
    "CommentRepository",
    "IssueRepository",
    "MeetingRepository",
    "ObjectRepository",
    "PinRepository",
    "QueryBuilder",
    "RecurringMeetingRepository",
    "ScheduleLogRepository",
    "SqlRepository",
    "StageHistoryRepository",
]
