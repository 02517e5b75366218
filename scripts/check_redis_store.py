# scripts/check_redis_store.py

import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
from expense_app.infrastructure.cache.redis_client import RedisClient
from expense_app.infrastructure.storage.redis_store import RedisKeyedStore

async def check():
    r = RedisClient()
    store = RedisKeyedStore(r, namespace="expenses-smoke")

    await store.put("probe/1", "first")
    current = await store.get_versioned("probe/1")
    stale = await store.commit({"probe/1": current.version - 1}, {"probe/1": "stale"})
    fresh = await store.commit({"probe/1": current.version}, {"probe/1": "second"})

    print("Read back:", current)
    print("Stale commit applied:", stale)
    print("Fresh commit applied:", fresh)
    print("Keys:", await store.list_keys_with_prefix("probe/"))

    await store.delete("probe/1")
    await r.close()

asyncio.run(check())
