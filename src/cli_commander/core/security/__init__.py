"""
Security components for the application.

Caller authentication, the ambient identity binding used while a command
runs, and the permission checks commands perform against that identity.
"""

from .access_control import check_permission
from .identity_context import get_current_identity, impersonate
from .middleware import CallerIdentityMiddleware, get_caller_identity

__all__ = [
    "CallerIdentityMiddleware",
    "check_permission",
    "get_caller_identity",
    "get_current_identity",
    "impersonate",
]
