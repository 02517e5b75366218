"""Domain layer: models, schemas, validators, exceptions. Pure business logic only."""

from expense_app.domain.exceptions import (
    DomainError,
    DomainValidationError,
    InvalidStatusTransitionError,
)
from expense_app.domain.models import (
    ApprovalStep,
    DecisionStatus,
    Expense,
    ExpenseStatus,
    User,
    UserRole,
)

__all__ = [
    "ApprovalStep",
    "DecisionStatus",
    "DomainError",
    "DomainValidationError",
    "Expense",
    "ExpenseStatus",
    "InvalidStatusTransitionError",
    "User",
    "UserRole",
]
