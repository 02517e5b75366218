"""Redis-backed KeyedStore. Values are plain string keys; versions live in one revision hash."""

import logging
from typing import Mapping, Optional

from redis.exceptions import RedisError

from expense_app.infrastructure.cache.redis_client import RedisClient
from expense_app.infrastructure.storage.keyed_store import ABSENT_VERSION, Versioned
from expense_app.persistence.exceptions import StorageFaultError

logger = logging.getLogger(__name__)

_GLOB_SPECIAL = "\\*?[]"


def _escape_glob(text: str) -> str:
    return "".join(f"\\{c}" if c in _GLOB_SPECIAL else c for c in text)


class RedisKeyedStore:
    """
    KeyedStore over Redis. Every key is stored as "{namespace}:{key}".
    commit runs as a single Lua script, so the version check and all writes are atomic.
    Redis failures surface as StorageFaultError.
    """

    def __init__(self, redis_client: RedisClient, namespace: str = "expenses") -> None:
        self._redis = redis_client
        self._namespace = namespace
        self._revision_hash = f"{namespace}:__meta__:revisions"
        self._revision_counter = f"{namespace}:__meta__:revision"

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    def _strip(self, full_key: str) -> str:
        return full_key[len(self._namespace) + 1 :]

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self._redis.get(self._key(key))
        except RedisError as e:
            raise StorageFaultError(f"Redis get failed for {key}: {e}") from e

    async def get_versioned(self, key: str) -> Versioned:
        try:
            value, revision = await self._redis.get_with_revision(self._key(key), self._revision_hash)
        except RedisError as e:
            raise StorageFaultError(f"Redis get failed for {key}: {e}") from e
        if value is None:
            return Versioned(value=None, version=ABSENT_VERSION)
        return Versioned(value=value, version=int(revision or ABSENT_VERSION))

    async def put(self, key: str, value: str) -> None:
        await self.commit({}, {key: value})

    async def delete(self, key: str) -> None:
        await self.commit({}, {key: None})

    async def list_keys_with_prefix(self, prefix: str) -> list[str]:
        match = f"{_escape_glob(self._key(prefix))}*"
        try:
            keys = await self._redis.scan_keys(match)
        except RedisError as e:
            raise StorageFaultError(f"Redis scan failed for prefix {prefix}: {e}") from e
        return sorted(self._strip(k) for k in keys)

    async def commit(
        self,
        expected: Mapping[str, int],
        writes: Mapping[str, Optional[str]],
    ) -> bool:
        try:
            applied = await self._redis.commit_versioned(
                self._revision_hash,
                self._revision_counter,
                [(self._key(k), v) for k, v in expected.items()],
                [(self._key(k), v) for k, v in writes.items()],
            )
        except RedisError as e:
            logger.error(
                "storage_commit_failed",
                extra={"keys": sorted(writes), "error": str(e)},
            )
            raise StorageFaultError(f"Redis commit failed: {e}") from e
        return applied
