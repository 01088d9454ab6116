"""
AI Helper Endpoints.

Email polishing never fails outright: when Gemini is unavailable the response
is a templated draft flagged with ``fallback: true``.
"""

from __future__ import annotations

from fastapi import APIRouter

from meridian.core.models.io.ai import PolishedEmail, PolishEmailRequest
from meridian.server.services.deps import EmailPolisherDep, UserIdDep

router = APIRouter()


@router.post(
    "/polish-email",
    response_model=PolishedEmail,
    summary="Polish Comment as Email",
    description="Rewrite an issue comment as an email subject and body.",
)
async def polish_email(payload: PolishEmailRequest, polisher: EmailPolisherDep, user_id: UserIdDep) -> PolishedEmail:
    return await polisher.polish(payload.comment, payload.context)
