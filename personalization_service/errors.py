"""
Error taxonomy for the personalization service.

Each error carries a machine-readable code and the HTTP status the web
layer should answer with.
"""

from typing import Any, Dict, Optional


class PersonalizationError(Exception):
    """Base class for errors surfaced to API callers."""

    code = "personalization_error"
    status = 500

    def __init__(self, message: str, code: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status is not None:
            self.status = status

    def to_dict(self) -> Dict[str, Any]:
        """Structured error body for JSON responses."""
        return {
            "code": self.code,
            "message": self.message,
            "data": {"status": self.status},
        }


class ValidationError(PersonalizationError):
    """Input that cannot be corrected by clamping or defaulting."""

    code = "invalid_param"
    status = 400


class UpstreamError(PersonalizationError):
    """The content store is unavailable or a query failed."""

    code = "recommendations_failed"
    status = 500


class AuthorizationError(PersonalizationError):
    """Missing or invalid credential."""

    code = "rest_forbidden"
    status = 401

    def __init__(self, message: str = "Invalid or missing API key."):
        super().__init__(message)


class NotFoundError(PersonalizationError):
    """A click was recorded for an unpublished or unknown item."""

    code = "invalid_post"
    status = 400

    def __init__(self, message: str = "Invalid post."):
        super().__init__(message)
