"""
Generic indexed entity store over a KeyedStore.

Each entity type is described by an EntitySpec value (name, index key, model, initial state, seed).
Records live at "{name}/{id}"; the ordered list of live ids lives at "{name}-index".
Every write is a versioned commit, so record and index always change together.
"""

import asyncio
import json
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar, Union

from pydantic import BaseModel

from expense_app.infrastructure.storage.keyed_store import ABSENT_VERSION, KeyedStore
from expense_app.persistence.exceptions import (
    EntityConflictError,
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

T = TypeVar("T", bound=BaseModel)

Transformation = Callable[[T], Union[T, Rejection]]


@dataclass(frozen=True)
class EntitySpec(Generic[T]):
    """Static description of one entity type. Models must carry a string `id` field."""

    name: str
    model: type[T]
    initial_state: T
    seed: tuple[T, ...] = ()
    id_prefix: str = ""
    index_name: str = field(default="")

    @property
    def index_key(self) -> str:
        return self.index_name or f"{self.name}-index"

    def record_key(self, entity_id: str) -> str:
        return f"{self.name}/{entity_id}"


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    next_cursor: Optional[str] = None


class IndexedEntity(Generic[T]):
    """
    Keyed-object store for one entity type with a maintained index of live ids.

    Concurrency: writers take per-key locks from a KeyLockArena (index key before record key via
    sorted order) and then commit with version checks. The lock serializes callers in this
    process; the version check catches writers in other processes, and the operation is re-read
    and retried up to max_retries times.
    """

    def __init__(
        self,
        store: KeyedStore,
        spec: EntitySpec[T],
        *,
        locks: Optional[KeyLockArena] = None,
        max_retries: int = 16,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._store = store
        self._spec = spec
        self._locks = locks or KeyLockArena()
        self._max_retries = max_retries
        self._logger = logger or logging.getLogger(__name__)
        self._seeded = False

    @property
    def spec(self) -> EntitySpec[T]:
        return self._spec

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def _dump(self, record: T) -> str:
        return record.model_dump_json(by_alias=True)

    def _load(self, raw: str) -> T:
        return self._spec.model.model_validate_json(raw)

    def _coerce(self, record: Union[T, Mapping[str, Any]]) -> T:
        """Validate a model or a mapping of field names (merged over the initial state)."""
        if isinstance(record, BaseModel):
            data = record.model_dump()
        else:
            data = {**self._spec.initial_state.model_dump(), **record}
        return self._spec.model.model_validate(data)

    async def _read_index(self) -> tuple[list[str], int]:
        current = await self._store.get_versioned(self._spec.index_key)
        if not current.exists:
            return [], ABSENT_VERSION
        return json.loads(current.value), current.version

    def _contended(self, action: str, entity_id: str) -> StorageFaultError:
        self._logger.error(
            "entity_commit_contended",
            extra={
                "entity": self._spec.name,
                "entity_id": entity_id,
                "action": action,
                "attempts": self._max_retries,
            },
        )
        return StorageFaultError(
            f"Gave up {action} of {self._spec.name} {entity_id} after {self._max_retries} conflicting commits"
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def exists(self, entity_id: str) -> bool:
        ids, _ = await self._read_index()
        return entity_id in ids

    async def get_state(self, entity_id: str) -> T:
        raw = await self._store.get(self._spec.record_key(entity_id))
        if raw is None:
            raise EntityNotFoundError(self._spec.name, entity_id)
        return self._load(raw)

    async def list(self, cursor: Optional[str] = None, limit: Optional[int] = None) -> Page[T]:
        """
        Resolve index ids to records in index order. Ids whose record is missing are skipped
        and logged as a data-integrity warning.
        """
        ids, _ = await self._read_index()
        start = 0
        if cursor is not None:
            try:
                start = int(cursor)
            except ValueError:
                raise InvalidCursorError(f"Invalid cursor: {cursor!r}") from None
            if start < 0 or start > len(ids):
                raise InvalidCursorError(f"Invalid cursor: {cursor!r}")
        end = len(ids) if limit is None else min(len(ids), start + limit)
        window = ids[start:end]

        raws = await asyncio.gather(
            *(self._store.get(self._spec.record_key(entity_id)) for entity_id in window)
        )
        items: list[T] = []
        for entity_id, raw in zip(window, raws):
            if raw is None:
                self._logger.warning(
                    "index_record_missing",
                    extra={"entity": self._spec.name, "entity_id": entity_id},
                )
                continue
            items.append(self._load(raw))
        return Page(items=items, next_cursor=str(end) if end < len(ids) else None)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, record: Union[T, Mapping[str, Any]]) -> T:
        """Write record and add its id to the index in one commit. Generates an id when empty."""
        entity = self._coerce(record)
        if not entity.id:
            entity = self._coerce({**entity.model_dump(), "id": f"{self._spec.id_prefix}{uuid.uuid4()}"})
        entity_id = entity.id
        key = self._spec.record_key(entity_id)
        index_key = self._spec.index_key
        payload = self._dump(entity)

        async with self._locks.hold(index_key, key):
            for _ in range(self._max_retries):
                ids, index_version = await self._read_index()
                current = await self._store.get_versioned(key)
                if current.exists or entity_id in ids:
                    raise EntityConflictError(self._spec.name, entity_id)
                committed = await self._store.commit(
                    {index_key: index_version, key: ABSENT_VERSION},
                    {key: payload, index_key: json.dumps([*ids, entity_id])},
                )
                if committed:
                    self._logger.info(
                        "entity_created",
                        extra={"entity": self._spec.name, "entity_id": entity_id},
                    )
                    return self._load(payload)
        raise self._contended("create", entity_id)

    async def delete(self, entity_id: str) -> None:
        """Remove record and index entry in one commit. Raises EntityNotFoundError if absent from both."""
        key = self._spec.record_key(entity_id)
        index_key = self._spec.index_key

        async with self._locks.hold(index_key, key):
            for _ in range(self._max_retries):
                ids, index_version = await self._read_index()
                current = await self._store.get_versioned(key)
                if entity_id not in ids and not current.exists:
                    raise EntityNotFoundError(self._spec.name, entity_id)
                writes: dict[str, Optional[str]] = {key: None}
                if entity_id in ids:
                    writes[index_key] = json.dumps([i for i in ids if i != entity_id])
                committed = await self._store.commit(
                    {index_key: index_version, key: current.version},
                    writes,
                )
                if committed:
                    self._logger.info(
                        "entity_deleted",
                        extra={"entity": self._spec.name, "entity_id": entity_id},
                    )
                    return
        raise self._contended("delete", entity_id)

    async def mutate(self, entity_id: str, fn: Transformation) -> MutationResult:
        """
        Atomic read-transform-write on one record. fn receives a private copy and returns the next
        record or a Rejection. Calls on the same id are linearized; different ids never block.
        """
        key = self._spec.record_key(entity_id)

        async with self._locks.hold(key):
            for _ in range(self._max_retries):
                current = await self._store.get_versioned(key)
                if not current.exists:
                    return Missing(entity_id)
                outcome = fn(self._load(current.value))
                if isinstance(outcome, Rejection):
                    return Rejected(outcome.reason)
                following = self._coerce(outcome)
                if following.id != entity_id:
                    raise ImmutableIdentityError(
                        f"Mutation of {self._spec.name} {entity_id} tried to change its id to {following.id}"
                    )
                payload = self._dump(following)
                if payload == current.value:
                    return Unchanged(self._load(payload))
                if await self._store.commit({key: current.version}, {key: payload}):
                    return Applied(self._load(payload))
                self._logger.info(
                    "entity_mutate_conflict",
                    extra={"entity": self._spec.name, "entity_id": entity_id},
                )
        raise self._contended("mutate", entity_id)

    async def ensure_seed(self) -> bool:
        """
        Load the seed records when the index is absent or empty. Runs its check once per instance;
        later calls return immediately. Returns True only for the call that wrote the seed.
        """
        if self._seeded:
            return False
        index_key = self._spec.index_key

        async with self._locks.hold(index_key):
            if self._seeded:
                return False
            for _ in range(self._max_retries):
                ids, index_version = await self._read_index()
                if ids or not self._spec.seed:
                    self._seeded = True
                    return False
                writes: dict[str, Optional[str]] = {
                    self._spec.record_key(record.id): self._dump(record) for record in self._spec.seed
                }
                writes[index_key] = json.dumps([record.id for record in self._spec.seed])
                if await self._store.commit({index_key: index_version}, writes):
                    self._seeded = True
                    self._logger.info(
                        "entity_seeded",
                        extra={"entity": self._spec.name, "count": len(self._spec.seed)},
                    )
                    return True
        raise self._contended("seed", index_key)
