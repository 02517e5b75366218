"""Governance: audit trail for workflow decisions. No FastAPI."""

from expense_app.governance.audit_logger import AuditLogger
from expense_app.governance.audit_models import AuditRecord

__all__ = [
    "AuditLogger",
    "AuditRecord",
]
