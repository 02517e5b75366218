# expense_app/infrastructure/cache/redis_client.py

import json
from typing import Optional, Sequence

import redis.asyncio as redis

from expense_app.config.settings import settings

# Versioned multi-key commit. KEYS[1] = revision hash, KEYS[2] = revision counter.
# ARGV[1] = {"expected": [[key, version], ...], "writes": [[key, value|null], ...]}.
_COMMIT_SCRIPT = """
local payload = cjson.decode(ARGV[1])
for _, item in ipairs(payload.expected) do
  local current = tonumber(redis.call('HGET', KEYS[1], item[1]) or '0')
  if current ~= tonumber(item[2]) then
    return 0
  end
end
for _, item in ipairs(payload.writes) do
  if item[2] == cjson.null then
    redis.call('DEL', item[1])
    redis.call('HDEL', KEYS[1], item[1])
  else
    local rev = redis.call('INCR', KEYS[2])
    redis.call('SET', item[1], item[2])
    redis.call('HSET', KEYS[1], item[1], rev)
  end
end
return 1
"""


class RedisClient:
    def __init__(self, url: str | None = None):
        self.client = redis.from_url(
            url or settings.redis_url,
            decode_responses=True,
        )

    async def get(self, key: str) -> str | None:
        """Get value for key. Returns None if key does not exist."""
        return await self.client.get(key)

    async def get_with_revision(self, key: str, revision_hash: str) -> tuple[str | None, str | None]:
        """Read value and its revision in one MULTI block."""
        async with self.client.pipeline(transaction=True) as pipe:
            pipe.get(key)
            pipe.hget(revision_hash, key)
            value, revision = await pipe.execute()
        return value, revision

    async def scan_keys(self, match: str) -> list[str]:
        """Return every key matching the glob pattern (SCAN, non-blocking)."""
        return [key async for key in self.client.scan_iter(match=match, count=500)]

    async def commit_versioned(
        self,
        revision_hash: str,
        revision_counter: str,
        expected: Sequence[tuple[str, int]],
        writes: Sequence[tuple[str, Optional[str]]],
    ) -> bool:
        """Apply writes only if every expected revision still matches (atomic Lua). Returns True if applied."""
        payload = json.dumps(
            {
                "expected": [list(item) for item in expected],
                "writes": [list(item) for item in writes],
            }
        )
        result = await self.client.eval(_COMMIT_SCRIPT, 2, revision_hash, revision_counter, payload)
        return bool(result)

    async def close(self) -> None:
        await self.client.aclose()
