"""FastAPI dependency injection: KeyedStore, entity stores, services, seeding."""

import asyncio
import logging
import weakref
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends

from expense_app.application.approval_workflow import ApprovalWorkflow
from expense_app.application.expense_service import ExpenseService
from expense_app.application.user_service import UserService
from expense_app.config.settings import get_settings
from expense_app.domain.entities import EXPENSE_ENTITY, USER_ENTITY
from expense_app.domain.models import Expense, User
from expense_app.governance.audit_logger import AuditLogger
from expense_app.infrastructure.cache.redis_client import RedisClient
from expense_app.infrastructure.storage.keyed_store import KeyedStore
from expense_app.infrastructure.storage.memory_store import InMemoryKeyedStore
from expense_app.infrastructure.storage.redis_store import RedisKeyedStore
from expense_app.persistence import IndexedEntity
from expense_app.security.rbac import RBACService

_store: KeyedStore | None = None
_redis_client: RedisClient | None = None


@dataclass(frozen=True)
class Entities:
    users: IndexedEntity[User]
    expenses: IndexedEntity[Expense]


# One pair of entity stores per KeyedStore, so seeding state and per-key locks are shared by all requests.
_entities: "weakref.WeakKeyDictionary[KeyedStore, Entities]" = weakref.WeakKeyDictionary()


def get_store() -> KeyedStore:
    """Return singleton KeyedStore for the configured backend."""
    global _store, _redis_client
    if _store is None:
        settings = get_settings()
        if settings.storage_backend == "redis":
            _redis_client = RedisClient(settings.redis_url)
            _store = RedisKeyedStore(_redis_client, namespace=settings.redis_namespace)
        else:
            _store = InMemoryKeyedStore()
    return _store


def get_entities(store: Annotated[KeyedStore, Depends(get_store)]) -> Entities:
    entities = _entities.get(store)
    if entities is None:
        max_retries = get_settings().mutate_max_retries
        entities = Entities(
            users=IndexedEntity(store, USER_ENTITY, max_retries=max_retries),
            expenses=IndexedEntity(store, EXPENSE_ENTITY, max_retries=max_retries),
        )
        _entities[store] = entities
    return entities


async def ensure_seeded(entities: Annotated[Entities, Depends(get_entities)]) -> None:
    """Seed both entity types before any /api handler runs. No-op after the first success."""
    await asyncio.gather(entities.users.ensure_seed(), entities.expenses.ensure_seed())


def get_rbac() -> RBACService:
    return RBACService()


def get_audit_logger() -> AuditLogger:
    return AuditLogger()


def get_user_service(
    entities: Annotated[Entities, Depends(get_entities)],
    audit_logger: Annotated[AuditLogger, Depends(get_audit_logger)],
    rbac: Annotated[RBACService, Depends(get_rbac)],
) -> UserService:
    return UserService(
        users=entities.users,
        audit_logger=audit_logger,
        rbac=rbac,
        logger=logging.getLogger("expense_app.application.user_service"),
    )


def get_expense_service(
    entities: Annotated[Entities, Depends(get_entities)],
    rbac: Annotated[RBACService, Depends(get_rbac)],
) -> ExpenseService:
    return ExpenseService(
        expenses=entities.expenses,
        rbac=rbac,
        logger=logging.getLogger("expense_app.application.expense_service"),
    )


def get_approval_workflow(
    entities: Annotated[Entities, Depends(get_entities)],
    audit_logger: Annotated[AuditLogger, Depends(get_audit_logger)],
    rbac: Annotated[RBACService, Depends(get_rbac)],
) -> ApprovalWorkflow:
    return ApprovalWorkflow(
        expenses=entities.expenses,
        users=entities.users,
        audit_logger=audit_logger,
        rbac=rbac,
        logger=logging.getLogger("expense_app.application.approval_workflow"),
    )


async def shutdown() -> None:
    """Close the Redis connection pool, if one was opened."""
    global _store, _redis_client
    if _redis_client is not None:
        await _redis_client.close()
    _redis_client = None
    _store = None
