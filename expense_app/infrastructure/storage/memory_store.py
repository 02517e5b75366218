"""In-memory KeyedStore. Thread-safe, process-local. Default backend for dev and tests."""

import threading
from typing import Mapping, Optional

from expense_app.infrastructure.storage.keyed_store import ABSENT_VERSION, Versioned


class InMemoryKeyedStore:
    """
    Dict-backed KeyedStore. Every operation runs under one lock, so commit is atomic
    across keys and across threads. Implements KeyedStore protocol.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._values: dict[str, str] = {}
        self._versions: dict[str, int] = {}
        self._revision = ABSENT_VERSION

    def _write(self, key: str, value: Optional[str]) -> None:
        if value is None:
            self._values.pop(key, None)
            self._versions.pop(key, None)
            return
        self._revision += 1
        self._values[key] = value
        self._versions[key] = self._revision

    async def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._values.get(key)

    async def get_versioned(self, key: str) -> Versioned:
        with self._lock:
            return Versioned(
                value=self._values.get(key),
                version=self._versions.get(key, ABSENT_VERSION),
            )

    async def put(self, key: str, value: str) -> None:
        with self._lock:
            self._write(key, value)

    async def delete(self, key: str) -> None:
        with self._lock:
            self._write(key, None)

    async def list_keys_with_prefix(self, prefix: str) -> list[str]:
        with self._lock:
            return sorted(k for k in self._values if k.startswith(prefix))

    async def commit(
        self,
        expected: Mapping[str, int],
        writes: Mapping[str, Optional[str]],
    ) -> bool:
        with self._lock:
            for key, version in expected.items():
                if self._versions.get(key, ABSENT_VERSION) != version:
                    return False
            for key, value in writes.items():
                self._write(key, value)
            return True

    def clear(self) -> None:
        """Drop all keys (for tests)."""
        with self._lock:
            self._values.clear()
            self._versions.clear()
