"""Value objects and entry models for the cache domain.

Timestamps and TTLs are expressed in milliseconds. A timestamp is an absolute
point in time (epoch milliseconds); a TTL is a duration.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, Optional, TypeVar, Union

if TYPE_CHECKING:
    from nova.domain.interfaces.cache_store import CacheStore

V = TypeVar("V")

# === Caching Context ===
Timestamp = Union[int, float]                # Epoch milliseconds
Milliseconds = Union[int, float]             # Duration in milliseconds


@dataclass(frozen=True)
class CacheEntryMeta:
    """A cache entry without its value.

    Used for existence checks and enumeration so adapters can skip loading
    large payloads.
    """
    key: str
    expires_at: Optional[Timestamp] = None

    def to_dict(self) -> dict:
        return {"key": self.key, "expires_at": self.expires_at}

    @classmethod
    def from_dict(cls, data: dict) -> "CacheEntryMeta":
        return cls(key=data["key"], expires_at=data.get("expires_at"))


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """One stored item: key, raw value and optional absolute expiry.

    An absent ``expires_at`` means the entry never expires.
    """
    key: str
    value: V
    expires_at: Optional[Timestamp] = None

    def to_meta(self) -> CacheEntryMeta:
        """Drops the value, keeping only the metadata."""
        return CacheEntryMeta(key=self.key, expires_at=self.expires_at)


@dataclass(frozen=True)
class SetCacheOptions:
    """Metadata handed to a store on write.

    If no expires_at is set, the entry does not expire.
    """
    expires_at: Optional[Timestamp] = None


@dataclass
class CacheWrapOptions:
    """Per-call options for ``NovaCache.wrap``."""
    # Time to live in milliseconds for the entry written on a miss
    ttl: Optional[Milliseconds] = None
    # Always invoke the producer and never touch the store
    disable_cache: bool = False
    # Invoke the producer and overwrite the entry even on a hit
    force_refresh: bool = False


@dataclass
class CacheOptions:
    """Construction options for ``NovaCache``."""
    store: "CacheStore"
    ttl: Optional[Milliseconds] = None
