"""Governance tests: audit immutability and audit fields completeness."""

import logging
from datetime import timezone
from unittest.mock import MagicMock

import pytest

from expense_app.core.context import correlation_id_ctx
from expense_app.governance.audit_logger import AUDIT_LOGGER_NAME, AuditLogger
from expense_app.governance.audit_models import AuditRecord


@pytest.fixture
def mock_logger():
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def audit_logger(mock_logger):
    return AuditLogger(logger=mock_logger)


async def test_audit_immutability(audit_logger, mock_logger):
    """Audit record must not allow mutation; emitted through the audit logger."""
    record = await audit_logger.log_action(
        actor="u2",
        action="expense_approved",
        resource_type="expense",
        resource_id="exp-1",
        reason="Approved",
        metadata={"owner_id": "u1"},
    )
    assert isinstance(record, AuditRecord)
    assert mock_logger.info.call_count == 1
    args, kwargs = mock_logger.info.call_args
    assert args == ("audit",)
    assert kwargs["extra"]["audit"] == record.to_dict()
    with pytest.raises(AttributeError):
        record.actor = "other"  # type: ignore[misc]


async def test_audit_fields_completeness(audit_logger):
    """Must include who, what, when (UTC), why, correlation_id."""
    token = correlation_id_ctx.set("corr-id")
    try:
        record = await audit_logger.log_action(
            actor="who",
            action="what",
            resource_type="resource",
            resource_id="id-1",
            reason="why",
        )
    finally:
        correlation_id_ctx.reset(token)
    assert record.actor == "who"
    assert record.action == "what"
    assert record.reason == "why"
    assert record.correlation_id == "corr-id"
    assert record.timestamp_utc.tzinfo == timezone.utc
    d = record.to_dict()
    assert "timestamp_utc" in d
    assert "actor" in d and "action" in d and "reason" in d and "correlation_id" in d


async def test_default_logger_name(caplog):
    with caplog.at_level(logging.INFO, logger=AUDIT_LOGGER_NAME):
        await AuditLogger().log_action(actor="a", action="b", resource_type="c", resource_id="d")
    assert [r.name for r in caplog.records] == [AUDIT_LOGGER_NAME]
    assert caplog.records[0].audit["resource_id"] == "d"
