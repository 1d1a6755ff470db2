"""
Domain errors raised by the services.

Each error is an HTTPException so FastAPI renders it as ``{"detail": ...}``
with the matching status code; services stay usable outside a request.
"""
from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class APIException(HTTPException):
    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class UnauthorizedError(APIException):
    def __init__(self, detail: str = "Not authenticated."):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="NOT_AUTHENTICATED",
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(APIException):
    def __init__(self, detail: str = "Access denied."):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail, error_code="FORBIDDEN")


class NotFoundError(APIException):
    def __init__(self, resource: str, identifier: Optional[str] = None):
        detail = f"{resource} not found." if identifier is None else f"{resource} not found: {identifier}"
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail, error_code="NOT_FOUND")
        self.resource = resource


class ValidationError(APIException):
    def __init__(self, detail: str, field: Optional[str] = None):
        error_code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            error_code=error_code,
        )


class ConflictError(APIException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail, error_code="CONFLICT")


class DependencyUnavailableError(APIException):
    """An external collaborator (the AI generator) failed or timed out."""

    def __init__(self, detail: str = "AI service unavailable."):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            error_code="DEPENDENCY_UNAVAILABLE",
        )


class AIDisabledError(DependencyUnavailableError):
    def __init__(
        self,
        detail: str = "AI features are not enabled. Please configure the OPENAI_API_KEY environment variable.",
    ):
        super().__init__(detail=detail)
        self.status_code = status.HTTP_501_NOT_IMPLEMENTED
        self.error_code = "AI_DISABLED"
