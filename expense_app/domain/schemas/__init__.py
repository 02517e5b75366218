"""Domain schemas. Request/response and validation."""

from expense_app.domain.schemas.envelope import ApiResponse
from expense_app.domain.schemas.expense import (
    ApprovalActionRequest,
    ExpenseCreateRequest,
    ExpenseDeleteRequest,
    ExpenseSummary,
    ExpenseUpdateRequest,
)
from expense_app.domain.schemas.user import RoleChangeRequest

__all__ = [
    "ApiResponse",
    "ApprovalActionRequest",
    "ExpenseCreateRequest",
    "ExpenseDeleteRequest",
    "ExpenseSummary",
    "ExpenseUpdateRequest",
    "RoleChangeRequest",
]
