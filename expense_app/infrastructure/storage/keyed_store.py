"""KeyedStore protocol: string keys, string values, versioned multi-key commit."""

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

ABSENT_VERSION = 0


@dataclass(frozen=True)
class Versioned:
    """Value read together with its version. version == ABSENT_VERSION means the key does not exist."""

    value: Optional[str]
    version: int

    @property
    def exists(self) -> bool:
        return self.version != ABSENT_VERSION


class KeyedStore(Protocol):
    """
    Order-preserving key -> value storage. Leaf component; no entity semantics.
    Versions come from a store-wide increasing revision, so a recreated key never repeats one.
    """

    async def get(self, key: str) -> Optional[str]:
        ...

    async def get_versioned(self, key: str) -> Versioned:
        ...

    async def put(self, key: str, value: str) -> None:
        """Overwrite key with value. No partial writes."""
        ...

    async def delete(self, key: str) -> None:
        """Delete key. Absent key is a no-op."""
        ...

    async def list_keys_with_prefix(self, prefix: str) -> list[str]:
        """Return keys starting with prefix, lexicographically ordered."""
        ...

    async def commit(
        self,
        expected: Mapping[str, int],
        writes: Mapping[str, Optional[str]],
    ) -> bool:
        """
        Atomic compare-and-set across keys. Applies every write (None deletes) only if each key in
        expected still has that version. Returns False and writes nothing otherwise.
        """
        ...
