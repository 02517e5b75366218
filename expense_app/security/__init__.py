"""Security: RBAC over user roles. No FastAPI."""

from expense_app.security.exceptions import AuthorizationError, SecurityError
from expense_app.security.rbac import RBACService

__all__ = [
    "AuthorizationError",
    "RBACService",
    "SecurityError",
]
