"""
API Token Endpoints.

Tokens authenticate external tools against the issues API. The plaintext
token is returned once, on creation; only its SHA-256 digest is stored.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Response, status

from meridian.core.models.io.api_tokens import ApiTokenCreate, ApiTokenCreated, ApiTokenRead
from meridian.server.api.cache_keys import API_TOKEN_KEYS, invalidate
from meridian.server.services.api_tokens import ApiTokenService
from meridian.server.services.deps import SessionDep, UserIdDep

router = APIRouter()


@router.get("", response_model=List[ApiTokenRead], summary="List API Tokens")
async def list_tokens(session: SessionDep, user_id: UserIdDep) -> List[ApiTokenRead]:
    return [ApiTokenRead.model_validate(row) for row in await ApiTokenService(session).list_tokens(user_id)]


@router.post(
    "",
    response_model=ApiTokenCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create API Token",
    description="Create a token. The response is the only place the plaintext token ever appears.",
)
async def create_token(
    payload: ApiTokenCreate, response: Response, session: SessionDep, user_id: UserIdDep
) -> ApiTokenCreated:
    token, plaintext = await ApiTokenService(session).create_token(user_id, payload)
    invalidate(response, API_TOKEN_KEYS)
    return ApiTokenCreated(**ApiTokenRead.model_validate(token).model_dump(), token=plaintext)


@router.post(
    "/{token_id}/revoke",
    response_model=ApiTokenRead,
    summary="Revoke API Token",
    responses={404: {"description": "Token not found"}},
)
async def revoke_token(token_id: str, response: Response, session: SessionDep, user_id: UserIdDep) -> ApiTokenRead:
    token = await ApiTokenService(session).revoke_token(user_id, token_id)
    invalidate(response, API_TOKEN_KEYS)
    return ApiTokenRead.model_validate(token)


@router.delete(
    "/{token_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete API Token",
    responses={404: {"description": "Token not found"}},
)
async def delete_token(token_id: str, response: Response, session: SessionDep, user_id: UserIdDep) -> None:
    await ApiTokenService(session).delete_token(user_id, token_id)
    invalidate(response, API_TOKEN_KEYS)
