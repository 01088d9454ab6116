"""
Request dependencies shared by the API routers.

Interactive users are authenticated upstream; the gateway forwards the user
id in the ``X-User-Id`` header. The LLM helpers are provided through
dependencies so tests can swap in offline models.
"""

from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from meridian.core.database import get_session
from meridian.llm.email_polish import EmailPolisher
from meridian.llm.minutes import MinutesGenerator

USER_ID_HEADER = "X-User-Id"


async def get_current_user_id(x_user_id: Optional[str] = Header(default=None, alias=USER_ID_HEADER)) -> str:
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {USER_ID_HEADER} header",
        )
    return x_user_id.strip()


def get_minutes_generator() -> MinutesGenerator:
    return MinutesGenerator()


def get_email_polisher() -> EmailPolisher:
    return EmailPolisher()


SessionDep = Annotated[AsyncSession, Depends(get_session)]
UserIdDep = Annotated[str, Depends(get_current_user_id)]
MinutesGeneratorDep = Annotated[MinutesGenerator, Depends(get_minutes_generator)]
EmailPolisherDep = Annotated[EmailPolisher, Depends(get_email_polisher)]
