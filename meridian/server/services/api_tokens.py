"""
Service for API tokens of the issues API.

A token is ``<prefix>`` followed by 40 hex characters. Only its SHA-256 hex
digest is stored; the plaintext is handed back once, at creation.
"""

from __future__ import annotations

import hashlib
import logging
import secrets
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from meridian.core.database.entities import ApiToken
from meridian.core.database.repositories import ApiTokenRepository
from meridian.core.models.io.api_tokens import ApiTokenCreate
from meridian.server.core.config import settings
from meridian.tracking.aging import utc_now

from .errors import AuthenticationError, NotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)

TOKEN_BYTES = 20
DISPLAY_PREFIX_LENGTH = 12


def hash_token(plaintext: str) -> str:
    return hashlib.sha256(plaintext.encode("utf-8")).hexdigest()


def generate_token(prefix: Optional[str] = None) -> Tuple[str, str, str]:
    """Return ``(plaintext, sha256_hex, display_prefix)`` for a new random token."""
    plaintext = f"{prefix or settings.api_tokens.prefix}{secrets.token_hex(TOKEN_BYTES)}"
    return plaintext, hash_token(plaintext), plaintext[:DISPLAY_PREFIX_LENGTH] + "..."


class ApiTokenService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.tokens = ApiTokenRepository(session)

    async def require(self, user_id: str, token_id: str) -> ApiToken:
        token = await self.tokens.get_owned(token_id, user_id)
        if token is None:
            raise NotFoundError("API token", token_id)
        return token

    async def list_tokens(self, user_id: str) -> List[ApiToken]:
        return await self.tokens.list_for_user(user_id)

    async def create_token(self, user_id: str, data: ApiTokenCreate) -> Tuple[ApiToken, str]:
        plaintext, token_hash, display_prefix = generate_token()
        token = await self.tokens.create(
            ApiToken(
                user_id=user_id,
                name=data.name,
                token_hash=token_hash,
                token_prefix=display_prefix,
                scopes=list(data.scopes),
                expires_at=data.expires_at,
            )
        )
        logger.info(f"Created API token {token.id} ({token.token_prefix}) for user {user_id}")
        return token, plaintext

    async def revoke_token(self, user_id: str, token_id: str) -> ApiToken:
        token = await self.require(user_id, token_id)
        token.revoked_at = utc_now()
        token = await self.tokens.update(token)
        logger.info(f"Revoked API token {token_id}")
        return token

    async def delete_token(self, user_id: str, token_id: str) -> None:
        await self.require(user_id, token_id)
        await self.tokens.delete(token_id)

    async def authenticate(self, authorization: Optional[str]) -> ApiToken:
        """
        Resolve a ``Bearer <token>`` header to its stored token.

        Args:
            authorization: Raw ``Authorization`` header value

        Returns:
            The matching, usable token (``last_used_at`` stamped)

        Raises:
            AuthenticationError: Missing or malformed header, unknown, revoked or expired token
        """
        prefix = settings.api_tokens.prefix
        if not authorization or not authorization.startswith(f"Bearer {prefix}"):
            raise AuthenticationError(f"Missing or invalid API token. Expected: Bearer {prefix}...")

        token = await self.tokens.get_by_hash(hash_token(authorization[len("Bearer ") :]))
        if token is None:
            raise AuthenticationError("Invalid API token")
        if token.revoked_at is not None:
            raise AuthenticationError("Token has been revoked")
        if token.expires_at is not None and token.expires_at < utc_now():
            raise AuthenticationError("Token has expired")

        token.last_used_at = utc_now()
        self.session.add(token)
        await self.session.commit()
        return token


def require_scope(token: ApiToken, scope: str) -> None:
    if scope not in (token.scopes or []):
        raise PermissionDeniedError(f"Token lacks {scope} scope")
