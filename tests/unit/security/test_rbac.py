"""Security tests: RBAC permission matrix fully tested."""

import pytest

from expense_app.domain.models import UserRole
from expense_app.security.exceptions import AuthorizationError
from expense_app.security.rbac import RBACService


@pytest.fixture
def rbac():
    return RBACService()


# Permission matrix:
# Role      Approve  ManageUsers  ViewAll  EditAny  DeleteAny
# ADMIN     ✓        ✓            ✓        ✓        ✓
# MANAGER   ✓        ✗            ✓        ✗        ✗
# EMPLOYEE  ✗        ✗            ✗        ✗        ✗

ACTIONS = ("approve", "manage_users", "view_all", "edit_any", "delete_any")


def test_admin_has_all_permissions(rbac):
    for action in ACTIONS:
        rbac.check_permission(UserRole.ADMIN, action)


def test_manager_approve_view_ok_rest_denied(rbac):
    rbac.check_permission(UserRole.MANAGER, "approve")
    rbac.check_permission(UserRole.MANAGER, "view_all")
    for action in ("manage_users", "edit_any", "delete_any"):
        with pytest.raises(AuthorizationError):
            rbac.check_permission(UserRole.MANAGER, action)


@pytest.mark.parametrize("action", ACTIONS)
def test_employee_denied_everything(rbac, action):
    assert rbac.has_permission(UserRole.EMPLOYEE, action) is False
    with pytest.raises(AuthorizationError):
        rbac.check_permission(UserRole.EMPLOYEE, action)


def test_unknown_action_raises(rbac):
    with pytest.raises(AuthorizationError):
        rbac.check_permission(UserRole.ADMIN, "unknown_action")


def test_custom_message(rbac):
    with pytest.raises(AuthorizationError) as exc_info:
        rbac.check_permission(UserRole.EMPLOYEE, "approve", "User does not have approval permissions.")
    assert exc_info.value.message == "User does not have approval permissions."
