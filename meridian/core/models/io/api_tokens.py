"""API token I/O models. The plaintext token only ever appears in ``ApiTokenCreated``."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from meridian.core.models.domain.enums import ApiTokenScope

from .types import UtcDateTime


class ApiTokenRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    token_prefix: str
    scopes: List[str]
    expires_at: Optional[datetime] = None
    revoked_at: Optional[datetime] = None
    last_used_at: Optional[datetime] = None
    created_at: datetime


class ApiTokenCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(min_length=1)
    scopes: List[ApiTokenScope] = Field(
        default_factory=lambda: [ApiTokenScope.issues_read, ApiTokenScope.issues_write], min_length=1
    )
    expires_at: Optional[UtcDateTime] = None


class ApiTokenCreated(ApiTokenRead):
    token: str = Field(description="Plaintext bearer token; shown once and never stored")
