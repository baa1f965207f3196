"""Cache interfaces.

Two namespaces share one contract: identities keyed by provider user id
and profile statuses keyed by email.
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from dossier.domain.model.identity import Identity
from dossier.domain.value import ProfileStatus

T = TypeVar("T")


class KeyValueCache(ABC, Generic[T]):
    """Best-effort key/value cache.

    Implementations raise CacheUnavailableError when the backing cache
    cannot be reached.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[T]:
        """Read a cached value.

        Args:
            key: Cache key

        Returns:
            The cached value, or None on a miss
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: T) -> None:
        """Write a value, overwriting any current entry.

        Args:
            key: Cache key
            value: Value to cache
        """
        pass

    @abstractmethod
    async def set_if_new(self, key: str, value: T) -> bool:
        """Write a value only when the key has no current entry.

        Args:
            key: Cache key
            value: Value to cache

        Returns:
            True if the value was written, False if an entry already existed
        """
        pass


class IdentityCache(KeyValueCache[Identity]):
    """Identity cache keyed by provider user id."""


class StatusCache(KeyValueCache[ProfileStatus]):
    """Profile status cache keyed by email."""
