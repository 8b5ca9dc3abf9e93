"""
Route decorators enforcing API and admin authorization.
"""
import logging
from functools import wraps
from typing import Callable

from flask import jsonify, request

from personalization_service.errors import AuthorizationError, PersonalizationError

from .services import RequestAuthorizer

logger = logging.getLogger(__name__)


def api_auth_required(authorizer: RequestAuthorizer) -> Callable:
    """Reject requests without a session or a valid API key with 401."""
    def decorator(f: Callable) -> Callable:
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not authorizer.is_authorized():
                logger.warning(
                    "REST API unauthorized access attempt",
                    extra={"context": {"route": request.path}},
                )
                error = AuthorizationError()
                return jsonify(error.to_dict()), error.status
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def admin_required(authorizer: RequestAuthorizer) -> Callable:
    """Restrict a route to configured admin users."""
    def decorator(f: Callable) -> Callable:
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not authorizer.is_admin():
                logger.warning(
                    "Admin endpoint accessed without admin session",
                    extra={"context": {"route": request.path}},
                )
                error = PersonalizationError("Admin access required.", code="admin_required", status=403)
                return jsonify(error.to_dict()), error.status
            return f(*args, **kwargs)
        return decorated_function
    return decorator
