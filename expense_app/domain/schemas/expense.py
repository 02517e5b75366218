"""Pydantic request/response schemas for the expense API. No storage fields beyond what callers send."""

from decimal import Decimal
from typing import Optional

from pydantic import Field

from expense_app.domain.models.base import CamelModel, Money


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class ExpenseCreateRequest(CamelModel):
    """Submit a new expense. Status and history are always set server-side."""

    user_id: str = Field(..., min_length=1)
    merchant: str = Field(..., min_length=1)
    amount: Money = Field(..., gt=0)
    currency: str = Field("USD", min_length=1)
    date: int = Field(..., gt=0, description="Epoch milliseconds")
    description: str = ""
    category: str = Field(..., min_length=1)
    receipt_url: Optional[str] = None


class ExpenseUpdateRequest(CamelModel):
    """Edit an expense. user_id is the acting user; omitted fields keep their stored value."""

    user_id: str = Field(..., min_length=1)
    merchant: Optional[str] = Field(None, min_length=1)
    amount: Optional[Money] = Field(None, gt=0)
    currency: Optional[str] = Field(None, min_length=1)
    date: Optional[int] = Field(None, gt=0)
    description: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1)
    receipt_url: Optional[str] = None

    def changes(self) -> dict:
        """Fields to apply, keyed by model field name."""
        return self.model_dump(exclude={"user_id"}, exclude_none=True)


class ExpenseDeleteRequest(CamelModel):
    user_id: str = Field(..., min_length=1)


class ApprovalActionRequest(CamelModel):
    approver_id: Optional[str] = None
    notes: Optional[str] = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class ExpenseSummary(CamelModel):
    """Dashboard aggregate over the expenses visible to the caller."""

    count: int = 0
    total_amount: Money = Decimal("0")
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    by_category: dict[str, Money] = Field(default_factory=dict)
