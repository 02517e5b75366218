"""Persistence: generic indexed entities over a KeyedStore. No FastAPI."""

from expense_app.persistence.entity import EntitySpec, IndexedEntity, Page
from expense_app.persistence.exceptions import (
    EntityConflictError,
    EntityError,
    EntityNotFoundError,
    ImmutableIdentityError,
    InvalidCursorError,
    StorageFaultError,
)
from expense_app.persistence.key_locks import KeyLockArena
from expense_app.persistence.mutation import (
    Applied,
    Missing,
    MutationResult,
    Rejected,
    Rejection,
    Unchanged,
)

__all__ = [
    "Applied",
    "EntityConflictError",
    "EntityError",
    "EntityNotFoundError",
    "EntitySpec",
    "ImmutableIdentityError",
    "IndexedEntity",
    "InvalidCursorError",
    "KeyLockArena",
    "Missing",
    "MutationResult",
    "Page",
    "Rejected",
    "Rejection",
    "StorageFaultError",
    "Unchanged",
]
