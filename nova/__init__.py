"""nova: TTL expiration semantics over pluggable key/value stores."""

from nova.core.cache import NovaCache, generate_key
from nova.core.expiration import is_expired, resolve_ttl
from nova.domain.exceptions import InvalidTTLError
from nova.domain.interfaces.cache_store import CacheStore
from nova.domain.models.cache import (
    CacheEntry,
    CacheEntryMeta,
    CacheOptions,
    CacheWrapOptions,
    SetCacheOptions,
)
from nova.infrastructure.stores import DiskCacheStore, FsStore, MemoryStore, create_store

__version__ = "0.1.0"

__all__ = [
    "NovaCache",
    "generate_key",
    "is_expired",
    "resolve_ttl",
    "InvalidTTLError",
    "CacheStore",
    "CacheEntry",
    "CacheEntryMeta",
    "CacheOptions",
    "CacheWrapOptions",
    "SetCacheOptions",
    "DiskCacheStore",
    "FsStore",
    "MemoryStore",
    "create_store",
]
