"""Error taxonomy shared by the store, auth and API layers.

Each error carries the HTTP status it maps to; the API layer renders
them as ``{"success": false, "message": ..., "errors": [...]}``.
"""

from typing import Any, Dict, List, Optional

from fastapi import status


class HearingApiError(Exception):
    """Base class for expected, mapped failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "message": self.message}


class ValidationError(HearingApiError):
    """Malformed or missing request fields."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message)
        self.errors = errors or []

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if self.errors:
            body["errors"] = self.errors
        return body


class ReferenceIntegrityError(ValidationError):
    """A create operation referenced a tenant, group or profile that does not exist."""

    default_message = "Referenced record does not exist"


class Unauthenticated(HearingApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access token required"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class InvalidCredentials(HearingApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class InvalidOrExpiredToken(HearingApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid or expired token"


class AccessDenied(HearingApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied to this tenant"


class NotFound(HearingApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(HearingApiError):
    """Unexpected fault; never exposes the underlying cause."""
