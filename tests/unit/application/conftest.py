"""Fixtures for application-service tests: seeded in-memory entity stores, mock audit logger."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from expense_app.application.approval_workflow import ApprovalWorkflow
from expense_app.application.expense_service import ExpenseService
from expense_app.application.user_service import UserService
from expense_app.domain.entities import EXPENSE_ENTITY, USER_ENTITY
from expense_app.domain.models import Expense, User, UserRole
from expense_app.infrastructure.storage.memory_store import InMemoryKeyedStore
from expense_app.persistence import IndexedEntity
from expense_app.security.rbac import RBACService


@pytest.fixture
def store():
    return InMemoryKeyedStore()


@pytest.fixture
async def users(store):
    entity = IndexedEntity(store, USER_ENTITY)
    for user in (
        User(id="e1", name="Erin Employee", email="erin@example.com", role=UserRole.EMPLOYEE),
        User(id="e2", name="Eli Employee", email="eli@example.com", role=UserRole.EMPLOYEE),
        User(id="m1", name="Mia Manager", email="mia@example.com", role=UserRole.MANAGER),
        User(id="m2", name="Max Manager", email="max@example.com", role=UserRole.MANAGER),
        User(id="a1", name="Ada Admin", email="ada@example.com", role=UserRole.ADMIN),
    ):
        await entity.create(user)
    return entity


@pytest.fixture
def expenses(store):
    return IndexedEntity(store, EXPENSE_ENTITY)


@pytest.fixture
def audit_logger():
    a = AsyncMock()
    a.log_action = AsyncMock(return_value=None)
    return a


@pytest.fixture
def rbac():
    return RBACService()


@pytest.fixture
def workflow(expenses, users, audit_logger, rbac):
    return ApprovalWorkflow(expenses=expenses, users=users, audit_logger=audit_logger, rbac=rbac)


@pytest.fixture
def expense_service(expenses, rbac):
    return ExpenseService(expenses=expenses, rbac=rbac)


@pytest.fixture
def user_service(users, audit_logger, rbac):
    return UserService(users=users, audit_logger=audit_logger, rbac=rbac)


@pytest.fixture
def make_expense(expenses):
    async def _make(**overrides) -> Expense:
        fields = {
            "id": "",
            "user_id": "e1",
            "merchant": "Acme",
            "amount": Decimal("42.50"),
            "date": 1717200000000,
            "category": "Travel",
        }
        fields.update(overrides)
        return await expenses.create(fields)

    return _make
