"""Global search I/O models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class SearchHit(BaseModel):
    id: str
    title: str
    subtitle: Optional[str] = None


class SearchResults(BaseModel):
    objects: List[SearchHit] = Field(default_factory=list)
    issues: List[SearchHit] = Field(default_factory=list)
    meetings: List[SearchHit] = Field(default_factory=list)
    comments: List[SearchHit] = Field(default_factory=list)
