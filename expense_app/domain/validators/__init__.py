"""Domain validators. Pure validation functions."""

from expense_app.domain.validators.request_validator import (
    parse_caller_role,
    validate_required_id,
    validate_role,
)

__all__ = [
    "parse_caller_role",
    "validate_required_id",
    "validate_role",
]
