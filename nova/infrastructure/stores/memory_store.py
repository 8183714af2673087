"""Volatile in-process cache store backed by a dict."""

import logging
from typing import Any, Dict, List, Optional

from nova.domain.interfaces.cache_store import CacheStore
from nova.domain.models.cache import CacheEntry, CacheEntryMeta, SetCacheOptions

logger = logging.getLogger(__name__)


class MemoryStore(CacheStore):
    """Keeps entries in a plain dict for the lifetime of the process."""

    def __init__(self):
        self._entries: Dict[str, CacheEntry] = {}

    async def clear(self) -> None:
        self._entries.clear()
        logger.debug("Cleared in-memory cache store.")

    async def set(self, key: str, value: Any, options: Optional[SetCacheOptions] = None) -> None:
        self._entries[key] = CacheEntry(
            key=key,
            value=value,
            expires_at=options.expires_at if options else None,
        )

    async def get(self, key: str) -> Optional[CacheEntry]:
        return self._entries.get(key)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    async def meta(self) -> List[CacheEntryMeta]:
        return [entry.to_meta() for entry in self._entries.values()]

    async def get_meta(self, key: str) -> Optional[CacheEntryMeta]:
        entry = await self.get(key)

        if entry is None:
            return None

        return entry.to_meta()

    def __len__(self) -> int:
        return len(self._entries)
