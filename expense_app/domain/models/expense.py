"""Expense record and its approval history. Pure data; transitions live in the approval workflow."""

from decimal import Decimal
from enum import Enum
from typing import FrozenSet, Optional

from pydantic import ConfigDict, Field

from expense_app.domain.models.base import CamelModel, Money


class ExpenseStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class DecisionStatus(str, Enum):
    """Outcome recorded on an approval step. Subset of ExpenseStatus."""

    APPROVED = "approved"
    REJECTED = "rejected"


# Statuses an approve/reject may start from, and statuses an edit may start from.
ACTIONABLE_STATUSES: FrozenSet[ExpenseStatus] = frozenset({ExpenseStatus.PENDING})
EDITABLE_STATUSES: FrozenSet[ExpenseStatus] = frozenset({ExpenseStatus.PENDING, ExpenseStatus.REJECTED})


class ApprovalStep(CamelModel):
    """One approve/reject decision. approver_name is a snapshot taken at decision time."""

    model_config = ConfigDict(frozen=True)

    approver_id: str
    approver_name: str
    status: DecisionStatus
    timestamp: int = Field(..., description="Epoch milliseconds")
    notes: Optional[str] = None


class Expense(CamelModel):
    id: str
    user_id: str
    merchant: str
    amount: Money = Field(Decimal("0"), ge=0)
    currency: str = "USD"
    date: int = Field(0, description="Epoch milliseconds")
    description: str = ""
    status: ExpenseStatus = ExpenseStatus.PENDING
    category: str = ""
    receipt_url: Optional[str] = None
    history: list[ApprovalStep] = Field(default_factory=list)
