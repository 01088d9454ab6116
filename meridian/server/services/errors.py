"""
Domain errors raised by the service layer.

Routers never build HTTP errors for these themselves; the exception handlers
in ``meridian.server.exception_handlers`` translate them (and the issues API
renders them in its own error envelope).
"""

from __future__ import annotations

from fastapi import status


class MeridianError(Exception):
    """Base class for errors with a known HTTP mapping."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(MeridianError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: str | None = None) -> None:
        message = f"{entity} not found" if entity_id is None else f"{entity} {entity_id} not found"
        super().__init__(message)
        self.entity = entity
        self.entity_id = entity_id


class ValidationError(MeridianError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"


class AuthenticationError(MeridianError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"


class PermissionDeniedError(MeridianError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"


class LLMServiceError(MeridianError):
    """The hosted language model failed or returned unusable output."""

    status_code = status.HTTP_502_BAD_GATEWAY
    code = "LLM_ERROR"


class PartialConversionError(MeridianError):
    """Converting action items stopped part-way; earlier issues stay created and linked."""

    def __init__(self, created: int, total: int, cause: Exception) -> None:
        super().__init__(f"Created {created} of {total} issues before failing: {cause}")
        self.created = created
        self.total = total
