"""User record."""

from enum import Enum

from expense_app.domain.models.base import CamelModel


class UserRole(str, Enum):
    EMPLOYEE = "employee"
    MANAGER = "manager"
    ADMIN = "admin"


class User(CamelModel):
    id: str
    name: str
    email: str
    role: UserRole = UserRole.EMPLOYEE
