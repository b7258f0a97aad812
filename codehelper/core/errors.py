"""API error types. Each carries an error code rendered next to the detail."""
from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class AppError(HTTPException):
    """Base error for the API."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        headers: Optional[Dict[str, str]] = None,
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code
        self.extra = extra or {}


class UnauthorizedError(AppError):
    def __init__(self, detail: str = "Not signed in"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(AppError):
    def __init__(self, detail: str = "Not authorized to perform this action"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="FORBIDDEN",
        )


class NotFoundError(AppError):
    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{entity} '{entity_id}' not found",
            error_code="NOT_FOUND",
            extra={"entity": entity, "id": entity_id},
        )


class PreconditionFailedError(AppError):
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_412_PRECONDITION_FAILED,
            detail=detail,
            error_code="PRECONDITION_FAILED",
        )


class TooManyRequestsError(AppError):
    """Rate budget exceeded; retry_after is in whole seconds."""

    def __init__(self, retry_after: int):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Too many requests. Please wait {retry_after} seconds before trying again.",
            headers={"Retry-After": str(retry_after)},
            error_code="TOO_MANY_REQUESTS",
            extra={"retry_after": retry_after},
        )


class InternalError(AppError):
    def __init__(self, detail: str = "An unexpected error occurred. Please try again."):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code="INTERNAL_SERVER_ERROR",
        )


class LLMProviderError(Exception):
    """The completion provider failed to return a reply."""
