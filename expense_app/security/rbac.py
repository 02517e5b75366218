"""Role-based access control. No FastAPI."""

from expense_app.domain.models.user import UserRole
from expense_app.security.exceptions import AuthorizationError

# Permission matrix:
# Role      Approve  ManageUsers  ViewAll  EditAny  DeleteAny
# ADMIN     ✓        ✓            ✓        ✓        ✓
# MANAGER   ✓        ✗            ✓        ✗        ✗
# EMPLOYEE  ✗        ✗            ✗        ✗        ✗

_ACTION_PERMISSIONS: dict[tuple[UserRole, str], bool] = {
    (UserRole.ADMIN, "approve"): True,
    (UserRole.ADMIN, "manage_users"): True,
    (UserRole.ADMIN, "view_all"): True,
    (UserRole.ADMIN, "edit_any"): True,
    (UserRole.ADMIN, "delete_any"): True,
    (UserRole.MANAGER, "approve"): True,
    (UserRole.MANAGER, "manage_users"): False,
    (UserRole.MANAGER, "view_all"): True,
    (UserRole.MANAGER, "edit_any"): False,
    (UserRole.MANAGER, "delete_any"): False,
    (UserRole.EMPLOYEE, "approve"): False,
    (UserRole.EMPLOYEE, "manage_users"): False,
    (UserRole.EMPLOYEE, "view_all"): False,
    (UserRole.EMPLOYEE, "edit_any"): False,
    (UserRole.EMPLOYEE, "delete_any"): False,
}


class RBACService:
    """Check permission for role and action. Raise AuthorizationError if invalid."""

    def has_permission(self, role: UserRole, action: str) -> bool:
        return _ACTION_PERMISSIONS.get((role, action), False)

    def check_permission(self, role: UserRole, action: str, message: str | None = None) -> None:
        """Raises AuthorizationError if role does not have permission for action."""
        if not self.has_permission(role, action):
            raise AuthorizationError(
                message or f"Role {role.value} does not have permission for action '{action}'"
            )
