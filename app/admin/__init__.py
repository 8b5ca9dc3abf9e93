"""
Admin Module

Targeting management, API key rotation, cache flush and recent logs for
admin users.
"""

from .factory import create_admin_module

__all__ = ["create_admin_module"]
