"""
Database entity models.

One module per business domain:
- objects: tracked objects and their stage history
- issues: issues raised against objects
- comments: comments and pins on objects/issues
- meetings: recorded meetings and generated minutes
- schedule: recurring meetings and per-occurrence logs
- api_tokens: hashed tokens for the issues API
"""

from .api_tokens import ApiToken
from .comments import Comment, Pin
from .issues import Issue
from .meetings import Meeting
from .objects import StageHistory, TrackedObject
from .schedule import RecurringMeeting, ScheduleLog

__all__ = [
    "ApiToken",
    "Comment",
    "Issue",
    "Meeting",
    "Pin",
    "RecurringMeeting",
    "ScheduleLog",
    "StageHistory",
    "TrackedObject",
]
