"""Storage adapters implementing the CacheStore interface.

Provides in-memory, file-pair and diskcache-backed stores, plus a factory
selecting one by name.
"""

from pathlib import Path
from typing import Optional, Union

from nova.domain.interfaces.cache_store import CacheStore
from nova.infrastructure.stores.disk_store import DiskCacheStore
from nova.infrastructure.stores.fs_store import FsStore
from nova.infrastructure.stores.memory_store import MemoryStore

STORE_KINDS = ("memory", "fs", "disk")


def create_store(kind: str, path: Optional[Union[str, Path]] = None) -> CacheStore:
    """Creates a storage adapter by name.

    Args:
        kind: One of 'memory', 'fs' or 'disk'.
        path: Base directory for the durable stores.

    Raises:
        ValueError: For an unknown kind, or a durable kind without a path.
    """
    if kind == "memory":
        return MemoryStore()
    if kind not in STORE_KINDS:
        raise ValueError(f"Unknown store kind '{kind}'. Choose one of: {', '.join(STORE_KINDS)}.")
    if path is None:
        raise ValueError(f"Store kind '{kind}' requires a path.")
    if kind == "fs":
        return FsStore(path)
    return DiskCacheStore(path)


__all__ = ["STORE_KINDS", "create_store", "DiskCacheStore", "FsStore", "MemoryStore"]
