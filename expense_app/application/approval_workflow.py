"""
Expense lifecycle state machine. No FastAPI.

pending --approve--> approved, pending --reject--> rejected, pending|rejected --edit--> pending.
Status guards run inside IndexedEntity.mutate, so a decision and a concurrent edit or second
decision on the same expense can never both win. Role and ownership guards run before mutate.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional, Union

from expense_app.domain.exceptions import InvalidStatusTransitionError
from expense_app.domain.models import (
    ACTIONABLE_STATUSES,
    EDITABLE_STATUSES,
    ApprovalStep,
    DecisionStatus,
    Expense,
    ExpenseStatus,
    User,
)
from expense_app.domain.validators import validate_required_id
from expense_app.governance.audit_logger import AuditLogger
from expense_app.persistence import (
    Applied,
    EntityNotFoundError,
    IndexedEntity,
    Missing,
    MutationResult,
    Rejected,
    Rejection,
)
from expense_app.security.exceptions import AuthorizationError
from expense_app.security.rbac import RBACService

ALREADY_ACTIONED = "This expense has already been actioned and cannot be changed."
NOT_EDITABLE = "Only pending or rejected expenses can be edited."

_DEFAULT_NOTES = {
    DecisionStatus.APPROVED: "Approved",
    DecisionStatus.REJECTED: "Rejected",
}

ExpenseTransformation = Callable[[Expense], Union[Expense, Rejection]]


def _now_millis() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def decide(approver: User, decision: DecisionStatus, notes: Optional[str], timestamp: int) -> ExpenseTransformation:
    """Transformation for approve/reject: refuse unless pending, else set status and append one step."""

    def apply(expense: Expense) -> Union[Expense, Rejection]:
        if expense.status not in ACTIONABLE_STATUSES:
            return Rejection(ALREADY_ACTIONED)
        step = ApprovalStep(
            approver_id=approver.id,
            approver_name=approver.name,
            status=decision,
            timestamp=timestamp,
            notes=notes or _DEFAULT_NOTES[decision],
        )
        return expense.model_copy(
            update={
                "status": ExpenseStatus(decision.value),
                "history": [*expense.history, step],
            }
        )

    return apply


def edit(changes: Mapping[str, Any]) -> ExpenseTransformation:
    """Transformation for edits: refuse approved expenses, else apply changes and reset to pending."""
    protected = {"id", "user_id", "status", "history"}
    update = {k: v for k, v in changes.items() if k not in protected}

    def apply(expense: Expense) -> Union[Expense, Rejection]:
        if expense.status not in EDITABLE_STATUSES:
            return Rejection(NOT_EDITABLE)
        return expense.model_copy(update={**update, "status": ExpenseStatus.PENDING})

    return apply


class ApprovalWorkflow:
    """
    Approve, reject, edit and delete expenses.
    Approver must hold the `approve` permission; editors and deleters must own the expense
    or hold `edit_any` / `delete_any`. Every successful transition is audited.
    """

    def __init__(
        self,
        expenses: IndexedEntity[Expense],
        users: IndexedEntity[User],
        audit_logger: AuditLogger,
        rbac: RBACService,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._expenses = expenses
        self._users = users
        self._audit = audit_logger
        self._rbac = rbac
        self._logger = logger or logging.getLogger(__name__)

    def _settle(self, expense_id: str, result: MutationResult) -> Expense:
        if isinstance(result, Missing):
            raise EntityNotFoundError("expense", expense_id)
        if isinstance(result, Rejected):
            raise InvalidStatusTransitionError(result.reason)
        return result.record

    async def _authorize_owner_or(self, expense: Expense, actor_id: str, action: str) -> None:
        """Owner always passes; anyone else must exist and hold `action`. Unknown actors are refused."""
        if expense.user_id == actor_id:
            return
        try:
            actor = await self._users.get_state(actor_id)
        except EntityNotFoundError:
            raise AuthorizationError("Unauthorized") from None
        self._rbac.check_permission(actor.role, action, "Unauthorized")

    async def approve(self, expense_id: str, approver_id: Optional[str], notes: Optional[str] = None) -> Expense:
        return await self._decide(expense_id, approver_id, DecisionStatus.APPROVED, notes)

    async def reject(self, expense_id: str, approver_id: Optional[str], notes: Optional[str] = None) -> Expense:
        return await self._decide(expense_id, approver_id, DecisionStatus.REJECTED, notes)

    async def _decide(
        self,
        expense_id: str,
        approver_id: Optional[str],
        decision: DecisionStatus,
        notes: Optional[str],
    ) -> Expense:
        approver_id = validate_required_id(approver_id, "Approver ID is required.")
        approver = await self._users.get_state(approver_id)
        self._rbac.check_permission(approver.role, "approve", "User does not have approval permissions.")

        result = await self._expenses.mutate(expense_id, decide(approver, decision, notes, _now_millis()))
        if isinstance(result, Rejected):
            self._logger.info(
                "expense_decision_refused",
                extra={"expense_id": expense_id, "approver_id": approver_id, "decision": decision.value},
            )
        expense = self._settle(expense_id, result)

        await self._audit.log_action(
            actor=approver.id,
            action=f"expense_{decision.value}",
            resource_type="expense",
            resource_id=expense_id,
            reason=expense.history[-1].notes,
            metadata={"owner_id": expense.user_id, "amount": str(expense.amount)},
        )
        return expense

    async def edit(self, expense_id: str, actor_id: str, changes: Mapping[str, Any]) -> Expense:
        current = await self._expenses.get_state(expense_id)
        await self._authorize_owner_or(current, actor_id, "edit_any")

        result = await self._expenses.mutate(expense_id, edit(changes))
        expense = self._settle(expense_id, result)
        if isinstance(result, Applied):
            await self._audit.log_action(
                actor=actor_id,
                action="expense_edited",
                resource_type="expense",
                resource_id=expense_id,
                metadata={"fields": sorted(changes)},
            )
        return expense

    async def delete(self, expense_id: str, actor_id: str) -> None:
        current = await self._expenses.get_state(expense_id)
        await self._authorize_owner_or(current, actor_id, "delete_any")

        await self._expenses.delete(expense_id)
        await self._audit.log_action(
            actor=actor_id,
            action="expense_deleted",
            resource_type="expense",
            resource_id=expense_id,
            metadata={"owner_id": current.user_id, "status": current.status.value},
        )
