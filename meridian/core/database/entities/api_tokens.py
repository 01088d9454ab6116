"""
API token entity.

Only the SHA-256 hex digest of a token is stored, together with a short
display prefix. The plaintext is returned once at creation.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime
from sqlmodel import JSON, Field

from ..base import Base, new_id, utc_now


class ApiToken(Base, table=True):
    """Table: meridian_api_tokens"""

    __tablename__ = "meridian_api_tokens"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    user_id: str = Field(index=True, max_length=128)
    name: str = Field(max_length=255)
    token_hash: str = Field(unique=True, index=True, max_length=64)
    token_prefix: str = Field(max_length=32)
    scopes: List[str] = Field(default_factory=list, sa_type=JSON)
    expires_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    revoked_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    last_used_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"ApiToken(id={self.id}, name={self.name}, prefix={self.token_prefix})"
