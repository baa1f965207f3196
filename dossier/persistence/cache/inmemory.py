"""In-memory caches for testing."""

from typing import Generic, Optional, TypeVar

from dossier.domain.model import Identity
from dossier.domain.repository import IdentityCache, KeyValueCache, StatusCache
from dossier.domain.value import ProfileStatus

T = TypeVar("T")


class InMemoryCache(KeyValueCache[T], Generic[T]):
    """Dict-backed cache.

    `writes` records every call that changed an entry as
    (operation, key, value) so tests can assert on cache traffic.
    """

    def __init__(self) -> None:
        self._entries: dict[str, T] = {}
        self.writes: list[tuple[str, str, T]] = []

    async def get(self, key: str) -> Optional[T]:
        return self._entries.get(key)

    async def set(self, key: str, value: T) -> None:
        self._entries[key] = value
        self.writes.append(("set", key, value))

    async def set_if_new(self, key: str, value: T) -> bool:
        if key in self._entries:
            return False
        self._entries[key] = value
        self.writes.append(("set_if_new", key, value))
        return True


class InMemoryIdentityCache(InMemoryCache[Identity], IdentityCache):
    """In-memory identity cache."""


class InMemoryStatusCache(InMemoryCache[ProfileStatus], StatusCache):
    """In-memory profile status cache."""
