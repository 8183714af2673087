"""Cache store backed by a ``diskcache.Cache`` directory.

The entry's ``expires_at`` travels as the diskcache tag. diskcache's own
``expire`` is never set; expiration is decided by the orchestrator. Culling is
turned off, so entries only leave through ``delete`` or ``clear``.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Union

import diskcache as dc

from nova.domain.interfaces.cache_store import CacheStore
from nova.domain.models.cache import CacheEntry, CacheEntryMeta, SetCacheOptions

logger = logging.getLogger(__name__)

_MISSING = object()


class DiskCacheStore(CacheStore):
    """SQLite-indexed durable store using the diskcache library."""

    def __init__(self, directory: Union[str, Path], timeout: float = 1):
        self.disk_cache = dc.Cache(str(directory), timeout=timeout, eviction_policy="none")
        logger.debug(f"Initialized disk cache store at: {self.disk_cache.directory}")

    async def set(self, key: str, value: Any, options: Optional[SetCacheOptions] = None) -> None:
        expires_at = options.expires_at if options else None
        self.disk_cache.set(key, value, tag=expires_at)

    async def get(self, key: str) -> Optional[CacheEntry]:
        value, expires_at = self.disk_cache.get(key, default=_MISSING, tag=True)
        if value is _MISSING:
            return None
        return CacheEntry(key=key, value=value, expires_at=expires_at)

    async def get_meta(self, key: str) -> Optional[CacheEntryMeta]:
        # diskcache has no tag-only read; the value is loaded and discarded
        entry = await self.get(key)
        return entry.to_meta() if entry is not None else None

    async def delete(self, key: str) -> None:
        self.disk_cache.delete(key)

    async def clear(self) -> None:
        count = self.disk_cache.clear()
        logger.info(f"Cleared disk cache store. Removed {count} items.")

    async def meta(self) -> List[CacheEntryMeta]:
        entries = []
        for key in list(self.disk_cache.iterkeys()):
            entry_meta = await self.get_meta(key)
            if entry_meta is not None:
                entries.append(entry_meta)
        return entries

    def close(self) -> None:
        self.disk_cache.close()
        logger.debug(f"Closed disk cache store at: {self.disk_cache.directory}")
