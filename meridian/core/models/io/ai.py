"""Email polishing I/O models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class EmailContext(BaseModel):
    """Issue context the email draft is written about."""

    issue_title: str
    object_name: str
    issue_type: str
    lifecycle_stage: str
    status: str
    owner_alias: Optional[str] = None
    comment_author: str


class PolishEmailRequest(BaseModel):
    comment: str = Field(min_length=1)
    context: EmailContext


class EmailDraft(BaseModel):
    subject: str = Field(description="Email subject, under 80 characters")
    body: str = Field(description="Plain-text email body without greeting or sign-off")


class PolishedEmail(EmailDraft):
    fallback: bool = Field(default=False, description="True when the draft was built locally without the LLM")
