"""Interface for cache storage adapters.

Defines the contract the cache orchestrator depends on for storing,
retrieving, deleting, enumerating and clearing raw entries. Implementations
(in-memory map, file pairs, diskcache, ...) are interchangeable and chosen by
the caller at construction time.
"""

import abc
from typing import Any, List, Optional

from nova.domain.models.cache import CacheEntry, CacheEntryMeta, SetCacheOptions


class CacheStore(abc.ABC):
    """Abstract Base Class for cache storage adapters.

    Adapters never apply expiration themselves; they persist ``expires_at``
    verbatim and hand it back. Not-found is reported as None, never raised.
    """

    @abc.abstractmethod
    async def set(self, key: str, value: Any, options: Optional[SetCacheOptions] = None) -> None:
        """Stores a value, fully replacing any previous entry for the key.

        Args:
            key: The cache key to store the item under.
            value: The item to store.
            options: Write metadata. A missing expires_at means no expiry.
        """
        pass

    @abc.abstractmethod
    async def get(self, key: str) -> Optional[CacheEntry]:
        """Retrieves the full entry for a key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The stored entry (expired or not), otherwise None.
        """
        pass

    @abc.abstractmethod
    async def get_meta(self, key: str) -> Optional[CacheEntryMeta]:
        """Retrieves the entry metadata without the value.

        Args:
            key: The cache key to inspect.

        Returns:
            The entry metadata, otherwise None.
        """
        pass

    @abc.abstractmethod
    async def delete(self, key: str) -> None:
        """Deletes an entry. Deleting a missing key is not an error.

        Args:
            key: The cache key to delete.
        """
        pass

    @abc.abstractmethod
    async def clear(self) -> None:
        """Removes all entries."""
        pass

    @abc.abstractmethod
    async def meta(self) -> List[CacheEntryMeta]:
        """Lists metadata for every stored entry, including expired ones."""
        pass

    def close(self) -> None:
        """Releases handles held by the store. Stores without any keep the no-op."""
        pass
