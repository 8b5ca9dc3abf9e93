"""
Auth Subsystem

Session and API-key authorization for the personalization API.
"""

from .services import RequestAuthorizer
from .decorators import api_auth_required, admin_required
from .factory import create_auth_module

__all__ = ['RequestAuthorizer', 'api_auth_required', 'admin_required', 'create_auth_module']
