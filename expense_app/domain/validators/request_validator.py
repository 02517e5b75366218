"""Validators for request fields the schemas leave open. Pure functions, no storage access."""

from typing import Optional

from expense_app.domain.exceptions import DomainValidationError
from expense_app.domain.models.user import UserRole


def validate_required_id(value: Optional[str], message: str) -> str:
    """Return the stripped id. Raises DomainValidationError(message) if missing or blank."""
    if not value or not value.strip():
        raise DomainValidationError(message)
    return value.strip()


def validate_role(value: Optional[str]) -> UserRole:
    """Parse a role name. Raises DomainValidationError if it is not a known role."""
    try:
        return UserRole(value)
    except ValueError:
        raise DomainValidationError("Invalid role specified.") from None


def parse_caller_role(value: Optional[str]) -> Optional[UserRole]:
    """Lenient role parse for list scoping: unknown or missing roles scope like no role."""
    if value is None:
        return None
    try:
        return UserRole(value)
    except ValueError:
        return None
