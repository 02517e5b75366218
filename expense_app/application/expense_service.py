"""Expense application service: submission, role-scoped reads and the dashboard summary. No FastAPI."""

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Optional

from expense_app.domain.exceptions import DomainValidationError
from expense_app.domain.models import Expense, ExpenseStatus
from expense_app.domain.schemas.expense import ExpenseCreateRequest, ExpenseSummary
from expense_app.domain.validators import parse_caller_role
from expense_app.persistence import IndexedEntity
from expense_app.security.rbac import RBACService

SCOPE_REQUIRED = "A userId or admin/manager role is required to fetch expenses."


class ExpenseService:
    def __init__(
        self,
        expenses: IndexedEntity[Expense],
        rbac: RBACService,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._expenses = expenses
        self._rbac = rbac
        self._logger = logger or logging.getLogger(__name__)

    async def list_expenses(self, user_id: Optional[str], role: Optional[str]) -> list[Expense]:
        """
        Roles with `view_all` see every expense; otherwise only the caller's own.
        Newest date first. The caller's role is trusted as given.
        """
        caller_role = parse_caller_role(role)
        page = await self._expenses.list()
        if caller_role is not None and self._rbac.has_permission(caller_role, "view_all"):
            visible = page.items
        elif user_id:
            visible = [e for e in page.items if e.user_id == user_id]
        else:
            raise DomainValidationError(SCOPE_REQUIRED)
        return sorted(visible, key=lambda e: e.date, reverse=True)

    async def get_expense(self, expense_id: str) -> Expense:
        return await self._expenses.get_state(expense_id)

    async def submit_expense(self, request: ExpenseCreateRequest) -> Expense:
        """Create a new expense. Id is generated; status is forced to pending with empty history."""
        expense = await self._expenses.create(
            {
                **request.model_dump(),
                "id": "",
                "status": ExpenseStatus.PENDING,
                "history": [],
            }
        )
        self._logger.info(
            "expense_submitted",
            extra={"expense_id": expense.id, "user_id": expense.user_id, "amount": str(expense.amount)},
        )
        return expense

    async def summarize(self, user_id: Optional[str], role: Optional[str]) -> ExpenseSummary:
        """Counts per status, total spent and spend per category over the caller's visible expenses."""
        expenses = await self.list_expenses(user_id, role)
        counts = {status: 0 for status in ExpenseStatus}
        by_category: dict[str, Decimal] = defaultdict(Decimal)
        total = Decimal("0")
        for expense in expenses:
            counts[expense.status] += 1
            total += expense.amount
            by_category[expense.category] += expense.amount
        return ExpenseSummary(
            count=len(expenses),
            total_amount=total,
            pending=counts[ExpenseStatus.PENDING],
            approved=counts[ExpenseStatus.APPROVED],
            rejected=counts[ExpenseStatus.REJECTED],
            by_category=dict(by_category),
        )
