"""Audit trail for workflow decisions. Emits one structured log record per action. No FastAPI."""

import logging
from datetime import datetime, timezone
from typing import Optional

from expense_app.core.context import correlation_id_ctx
from expense_app.governance.audit_models import AuditRecord

AUDIT_LOGGER_NAME = "expense_app.audit"


class AuditLogger:
    """
    Writes immutable audit records to the audit logger.
    Must include: who, what, when (UTC), why, correlation_id.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(AUDIT_LOGGER_NAME)

    async def log_action(
        self,
        *,
        actor: str,
        action: str,
        resource_type: str,
        resource_id: str,
        reason: str | None = None,
        metadata: dict | None = None,
    ) -> AuditRecord:
        """Build the audit record (timestamp UTC, correlation id from request context) and log it."""
        record = AuditRecord(
            actor=actor,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            reason=reason,
            correlation_id=correlation_id_ctx.get(),
            metadata=metadata,
            timestamp_utc=datetime.now(timezone.utc),
        )
        self._logger.info("audit", extra={"audit": record.to_dict()})
        return record
