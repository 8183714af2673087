"""Filesystem cache store keeping one file pair per key.

The directory looks like the following::

    /base_path
        <md5(key)>.value.pkl   <-- pickled value
        <md5(key)>.meta.json   <-- key and expiry, readable without loading the value
"""

import hashlib
import json
import logging
import os
import pickle
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from nova.domain.interfaces.cache_store import CacheStore
from nova.domain.models.cache import CacheEntry, CacheEntryMeta, SetCacheOptions

logger = logging.getLogger(__name__)

VALUE_SUFFIX = ".value.pkl"
META_SUFFIX = ".meta.json"

# Sentinel distinguishing "no readable value file" from a stored None
_MISSING = object()


class FsStore(CacheStore):
    """Durable store writing a value file and a metadata file per key.

    Unreadable or missing files read as absent. Writes go through a temp file
    and ``os.replace`` so readers never see a partially written file.
    """

    def __init__(self, base_path: Union[str, Path]):
        self.base_path = Path(base_path)
        logger.debug(f"FsStore initialized at: {self.base_path}")

    @staticmethod
    def hash_key(key: str) -> str:
        return hashlib.md5(key.encode("utf-8")).hexdigest()

    def _get_paths(self, key: str) -> Dict[str, Path]:
        safe_key = self.hash_key(key)
        return {
            "value": self.base_path / f"{safe_key}{VALUE_SUFFIX}",
            "meta": self.base_path / f"{safe_key}{META_SUFFIX}",
        }

    async def clear(self) -> None:
        if self.base_path.exists():
            shutil.rmtree(self.base_path)
            logger.info(f"Cleared file cache at: {self.base_path}")

    async def meta(self) -> List[CacheEntryMeta]:
        if not self.base_path.is_dir():
            return []

        entries = []
        for meta_file in sorted(self.base_path.glob(f"*{META_SUFFIX}")):
            entry_meta = self._read_meta(meta_file)
            if entry_meta is not None:
                entries.append(entry_meta)
        return entries

    async def get(self, key: str) -> Optional[CacheEntry]:
        paths = self._get_paths(key)
        entry_meta = self._read_meta(paths["meta"])
        value = self._read_value(paths["value"])

        if entry_meta is None or value is _MISSING:
            return None

        return CacheEntry(key=entry_meta.key, value=value, expires_at=entry_meta.expires_at)

    async def get_meta(self, key: str) -> Optional[CacheEntryMeta]:
        return self._read_meta(self._get_paths(key)["meta"])

    async def delete(self, key: str) -> None:
        paths = self._get_paths(key)
        paths["meta"].unlink(missing_ok=True)
        paths["value"].unlink(missing_ok=True)
        logger.debug(f"Deleted file cache entry: key={key}")

    async def set(self, key: str, value: Any, options: Optional[SetCacheOptions] = None) -> None:
        paths = self._get_paths(key)
        entry_meta = CacheEntryMeta(key=key, expires_at=options.expires_at if options else None)

        self.base_path.mkdir(parents=True, exist_ok=True)
        # Entry reads as absent until the new meta lands
        paths["meta"].unlink(missing_ok=True)
        self._write_atomic(paths["value"], pickle.dumps(value))
        self._write_atomic(paths["meta"], json.dumps(entry_meta.to_dict()).encode("utf-8"))
        logger.debug(f"Stored file cache entry: key={key}, file={paths['value']}")

    def _write_atomic(self, path: Path, data: bytes) -> None:
        temp_path = path.with_name(path.name + ".tmp")
        try:
            with open(temp_path, "wb") as f:
                f.write(data)
            os.replace(temp_path, path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise

    def _read_meta(self, path: Path) -> Optional[CacheEntryMeta]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return CacheEntryMeta.from_dict(json.load(f))
        except FileNotFoundError:
            return None
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Failed to read cache metadata file {path}: {e}")
            return None

    def _read_value(self, path: Path) -> Any:
        try:
            with open(path, "rb") as f:
                return pickle.load(f)
        except FileNotFoundError:
            return _MISSING
        except (pickle.UnpicklingError, EOFError, OSError, AttributeError, ImportError) as e:
            logger.warning(f"Failed to read cache value file {path}: {e}")
            return _MISSING
