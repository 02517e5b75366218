"""User application service: listing and admin role changes. No FastAPI."""

import logging
from typing import Optional

from expense_app.domain.models import User
from expense_app.domain.validators import validate_required_id, validate_role
from expense_app.governance.audit_logger import AuditLogger
from expense_app.persistence import EntityNotFoundError, IndexedEntity, Missing
from expense_app.security.rbac import RBACService


class UserService:
    def __init__(
        self,
        users: IndexedEntity[User],
        audit_logger: AuditLogger,
        rbac: RBACService,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._users = users
        self._audit = audit_logger
        self._rbac = rbac
        self._logger = logger or logging.getLogger(__name__)

    async def list_users(self) -> list[User]:
        page = await self._users.list()
        return page.items

    async def get_user(self, user_id: str) -> User:
        return await self._users.get_state(user_id)

    async def change_role(self, target_id: str, role: Optional[str], admin_id: Optional[str]) -> User:
        """Admin-only role change. Validation order: admin id, role value, admin exists, admin role, target."""
        admin_id = validate_required_id(admin_id, "Admin ID is required for authorization.")
        new_role = validate_role(role)
        admin = await self._users.get_state(admin_id)
        self._rbac.check_permission(admin.role, "manage_users", "Only admins can change user roles.")

        result = await self._users.mutate(target_id, lambda user: user.model_copy(update={"role": new_role}))
        if isinstance(result, Missing):
            raise EntityNotFoundError("user", target_id)

        self._logger.info(
            "user_role_changed",
            extra={"user_id": target_id, "role": new_role.value, "admin_id": admin_id},
        )
        await self._audit.log_action(
            actor=admin_id,
            action="user_role_changed",
            resource_type="user",
            resource_id=target_id,
            metadata={"role": new_role.value},
        )
        return result.record
