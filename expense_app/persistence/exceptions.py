"""Persistence-layer exceptions. Typed, no HTTP."""


class EntityError(Exception):
    """Base for all entity-store errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class EntityNotFoundError(EntityError):
    """Raised when an id is absent from the entity type's index or record set."""

    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} not found: {entity_id}")


class EntityConflictError(EntityError):
    """Raised when create would overwrite an existing record."""

    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} already exists: {entity_id}")


class ImmutableIdentityError(EntityError):
    """Raised when a mutation tries to change a record's id."""


class StorageFaultError(EntityError):
    """Raised when the underlying key-value store fails or stays contended. Not retried by callers."""


class InvalidCursorError(EntityError):
    """Raised when a list cursor is not one previously returned by list()."""
