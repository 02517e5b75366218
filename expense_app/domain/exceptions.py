"""Domain-specific exceptions. Pure domain layer, no infrastructure."""


class DomainError(Exception):
    """Base for all domain-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DomainValidationError(DomainError):
    """Raised when a request is missing fields or carries malformed values."""


class InvalidStatusTransitionError(DomainError):
    """Raised when an expense's current status does not allow the requested transition."""
