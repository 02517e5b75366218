"""Domain models. Pure business entities."""

from expense_app.domain.models.expense import (
    ACTIONABLE_STATUSES,
    EDITABLE_STATUSES,
    ApprovalStep,
    DecisionStatus,
    Expense,
    ExpenseStatus,
)
from expense_app.domain.models.user import User, UserRole

__all__ = [
    "ACTIONABLE_STATUSES",
    "EDITABLE_STATUSES",
    "ApprovalStep",
    "DecisionStatus",
    "Expense",
    "ExpenseStatus",
    "User",
    "UserRole",
]
