"""Expenses API router: role-scoped reads, submission, edit, delete, approve/reject."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from expense_app.api.dependencies import get_approval_workflow, get_expense_service
from expense_app.api.responses import ok
from expense_app.application.approval_workflow import ApprovalWorkflow
from expense_app.application.expense_service import ExpenseService
from expense_app.domain.schemas.expense import (
    ApprovalActionRequest,
    ExpenseCreateRequest,
    ExpenseDeleteRequest,
    ExpenseUpdateRequest,
)

router = APIRouter()


@router.get("/expenses")
async def list_expenses(
    expense_service: Annotated[ExpenseService, Depends(get_expense_service)],
    user_id: Annotated[Optional[str], Query(alias="userId")] = None,
    role: Optional[str] = None,
):
    """Admins and managers see all expenses; anyone else only their own. Newest first."""
    return ok(await expense_service.list_expenses(user_id, role))


@router.get("/expenses/summary")
async def summarize_expenses(
    expense_service: Annotated[ExpenseService, Depends(get_expense_service)],
    user_id: Annotated[Optional[str], Query(alias="userId")] = None,
    role: Optional[str] = None,
):
    """Dashboard totals over the same scope as GET /expenses."""
    return ok(await expense_service.summarize(user_id, role))


@router.get("/expenses/{expense_id}")
async def get_expense(
    expense_id: str,
    expense_service: Annotated[ExpenseService, Depends(get_expense_service)],
):
    return ok(await expense_service.get_expense(expense_id))


@router.post("/expenses")
async def create_expense(
    body: ExpenseCreateRequest,
    expense_service: Annotated[ExpenseService, Depends(get_expense_service)],
):
    return ok(await expense_service.submit_expense(body))


@router.put("/expenses/{expense_id}")
async def edit_expense(
    expense_id: str,
    body: ExpenseUpdateRequest,
    workflow: Annotated[ApprovalWorkflow, Depends(get_approval_workflow)],
):
    return ok(await workflow.edit(expense_id, actor_id=body.user_id, changes=body.changes()))


@router.delete("/expenses/{expense_id}")
async def delete_expense(
    expense_id: str,
    body: ExpenseDeleteRequest,
    workflow: Annotated[ApprovalWorkflow, Depends(get_approval_workflow)],
):
    await workflow.delete(expense_id, actor_id=body.user_id)
    return ok({"id": expense_id})


@router.post("/expenses/{expense_id}/approve")
async def approve_expense(
    expense_id: str,
    body: ApprovalActionRequest,
    workflow: Annotated[ApprovalWorkflow, Depends(get_approval_workflow)],
):
    return ok(await workflow.approve(expense_id, body.approver_id, body.notes))


@router.post("/expenses/{expense_id}/reject")
async def reject_expense(
    expense_id: str,
    body: ApprovalActionRequest,
    workflow: Annotated[ApprovalWorkflow, Depends(get_approval_workflow)],
):
    return ok(await workflow.reject(expense_id, body.approver_id, body.notes))
