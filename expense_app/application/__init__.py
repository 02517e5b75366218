# Application layer: services that orchestrate domain, persistence and security.

from expense_app.application.approval_workflow import ApprovalWorkflow
from expense_app.application.expense_service import ExpenseService
from expense_app.application.user_service import UserService

__all__ = [
    "ApprovalWorkflow",
    "ExpenseService",
    "UserService",
]
