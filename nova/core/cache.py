"""Cache orchestrator.

Wraps a CacheStore adapter with TTL semantics: resolves default vs. per-call
TTLs, evicts expired entries lazily on read, and memoizes expensive
computations through ``wrap``.
"""

import functools
import hashlib
import inspect
import logging
from typing import Any, Awaitable, Callable, List, Optional, Union

from nova.core.expiration import expires_at_for, is_expired, now_ms, resolve_ttl, validate_ttl
from nova.domain.interfaces.cache_store import CacheStore
from nova.domain.models.cache import (
    CacheEntryMeta,
    CacheOptions,
    CacheWrapOptions,
    Milliseconds,
    SetCacheOptions,
    Timestamp,
)

logger = logging.getLogger(__name__)

Producer = Callable[[], Union[Any, Awaitable[Any]]]


class NovaCache:
    """TTL-aware cache façade over a pluggable storage adapter.

    The adapter is shared by reference and never replaced. The default TTL is
    the only mutable state and is changed through ``set_default_ttl``.
    """

    def __init__(
        self,
        store: CacheStore,
        ttl: Optional[Milliseconds] = None,
        clock: Optional[Callable[[], Timestamp]] = None,
    ):
        """Initializes the cache.

        Args:
            store: Storage adapter holding the entries.
            ttl: Default time to live in milliseconds. None or 0 means entries
                written without an explicit TTL never expire.
            clock: Returns the current time in epoch milliseconds.
        """
        self._store = store
        self._default_ttl = validate_ttl(ttl)
        self._clock = clock or now_ms
        logger.debug(f"NovaCache initialized. store={store.__class__.__name__}, default_ttl={ttl}")

    @classmethod
    def from_options(cls, options: CacheOptions, **kwargs: Any) -> "NovaCache":
        return cls(store=options.store, ttl=options.ttl, **kwargs)

    @property
    def store(self) -> CacheStore:
        return self._store

    @property
    def default_ttl(self) -> Optional[Milliseconds]:
        return self._default_ttl

    def set_default_ttl(self, ttl: Optional[Milliseconds]) -> None:
        """Changes the TTL applied to subsequent writes without an explicit TTL.

        Entries already stored keep their expiry.
        """
        self._default_ttl = validate_ttl(ttl)
        logger.debug(f"Default TTL set to {ttl}")

    def now(self) -> Timestamp:
        """Current time according to the cache clock, in epoch milliseconds."""
        return self._clock()

    def is_expired(self, entry: CacheEntryMeta) -> bool:
        return is_expired(entry, self._clock())

    async def get(self, key: str) -> Optional[Any]:
        """Returns the cached value, or None when absent or expired.

        An expired entry is deleted from the store before returning.
        """
        entry = await self._store.get(key)

        if entry is None:
            logger.debug(f"Cache MISS for key: {key}")
            return None

        if self.is_expired(entry):
            logger.debug(f"Cache EXPIRED for key: {key}. Evicting.")
            try:
                await self._store.delete(entry.key)
            except Exception as e:
                logger.warning(f"Failed to evict expired cache entry '{key}': {e}", exc_info=True)
            return None

        logger.debug(f"Cache HIT for key: {key}")
        return entry.value

    async def set(self, key: str, value: Any, ttl: Optional[Milliseconds] = None) -> None:
        """Sets a value in the cache with the given key.

        If no ttl is provided, the default ttl is used.
        If 0 is provided for ttl, the entry does not expire.
        """
        resolved_ttl = resolve_ttl(ttl, self._default_ttl)
        expires_at = expires_at_for(resolved_ttl, self._clock())

        await self._store.set(key, value, SetCacheOptions(expires_at=expires_at))
        logger.debug(f"Cache PUT key: {key}, expires_at: {expires_at}")

    async def delete(self, key: str) -> None:
        await self._store.delete(key)

    async def has(self, key: str) -> bool:
        """Checks for a live entry using metadata only. Never evicts."""
        entry_meta = await self._store.get_meta(key)

        return entry_meta is not None and not self.is_expired(entry_meta)

    async def meta(self) -> List[CacheEntryMeta]:
        """Metadata for every stored entry, expired ones included."""
        return await self._store.meta()

    async def clear(self) -> None:
        await self._store.clear()
        logger.info("Cleared cache.")

    async def wrap(
        self,
        key: str,
        producer: Producer,
        options: Optional[CacheWrapOptions] = None,
        **overrides: Any,
    ) -> Any:
        """Returns the cached value for key, or computes, stores and returns it.

        Args:
            key: The cache key.
            producer: Zero-argument callable, sync or async, computing the value.
            options: Wrap options (ttl, disable_cache, force_refresh).
            **overrides: Keyword overrides for individual option fields.

        Returns:
            The cached or freshly produced value. Producer errors propagate and
            leave the cache untouched.
        """
        opts = CacheWrapOptions(**{**vars(options or CacheWrapOptions()), **overrides})
        validate_ttl(opts.ttl)

        if opts.disable_cache:
            return await _call_producer(producer)

        cached_value = await self.get(key)

        if cached_value is not None and not opts.force_refresh:
            return cached_value

        result = await _call_producer(producer)

        await self.set(key, result, opts.ttl)

        return result

    async def sweep(self) -> int:
        """Deletes every expired entry and returns how many were removed.

        Reads never depend on this; it only reclaims space.
        """
        removed = 0
        for entry_meta in await self._store.meta():
            if self.is_expired(entry_meta):
                await self._store.delete(entry_meta.key)
                removed += 1
        logger.info(f"Swept {removed} expired cache entries.")
        return removed

    def cached(self, prefix: str, ttl: Optional[Milliseconds] = None) -> Callable:
        """Decorator memoizing an async function through ``wrap``.

        Args:
            prefix: A prefix for the cache key.
            ttl: Optional TTL for entries written by the decorated function.

        Returns:
            A decorator.
        """
        def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
            @functools.wraps(func)
            async def wrapper(*args: Any, **kwargs: Any) -> Any:
                key = generate_key(prefix, *args, **kwargs)
                return await self.wrap(key, lambda: func(*args, **kwargs), ttl=ttl)
            return wrapper
        return decorator


async def _call_producer(producer: Producer) -> Any:
    result = producer()
    if inspect.isawaitable(result):
        result = await result
    return result


def generate_key(prefix: str, *args: Any, **kwargs: Any) -> str:
    """Generates a consistent cache key from a prefix and call arguments."""
    key_parts = [prefix]
    key_parts.extend(map(str, args))
    # Ensure consistent order for kwargs
    key_parts.extend(f"{k}={v}" for k, v in sorted(kwargs.items()))
    key_string = "|".join(key_parts)
    return f"{prefix}:{hashlib.sha256(key_string.encode('utf-8')).hexdigest()}"
