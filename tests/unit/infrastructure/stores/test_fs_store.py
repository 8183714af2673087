import hashlib
import json
import pickle
from pathlib import Path

import pytest

from nova.domain.models.cache import CacheEntry, CacheEntryMeta, SetCacheOptions
from nova.infrastructure.stores import FsStore


@pytest.fixture
def base_path(tmp_path: Path) -> Path:
    return tmp_path / "fs-cache"


@pytest.fixture
def fs_store(base_path: Path) -> FsStore:
    return FsStore(base_path)


def test_hash_key_is_md5_hex():
    assert FsStore.hash_key("testKey") == hashlib.md5(b"testKey").hexdigest()
    assert FsStore.hash_key("a/b:c") == FsStore.hash_key("a/b:c")
    assert FsStore.hash_key("a") != FsStore.hash_key("b")


@pytest.mark.asyncio
async def test_writes_file_pair(fs_store: FsStore, base_path: Path):
    await fs_store.set("user:42", {"name": "Ada"}, SetCacheOptions(expires_at=99))

    safe_key = FsStore.hash_key("user:42")
    value_file = base_path / f"{safe_key}.value.pkl"
    meta_file = base_path / f"{safe_key}.meta.json"

    assert pickle.loads(value_file.read_bytes()) == {"name": "Ada"}
    assert json.loads(meta_file.read_text()) == {"key": "user:42", "expires_at": 99}
    assert sorted(p.name for p in base_path.iterdir()) == sorted([value_file.name, meta_file.name])


@pytest.mark.asyncio
async def test_get_round_trip(fs_store: FsStore):
    await fs_store.set("k", "v", SetCacheOptions(expires_at=None))

    assert await fs_store.get("k") == CacheEntry(key="k", value="v", expires_at=None)
    assert await fs_store.get_meta("k") == CacheEntryMeta(key="k")


@pytest.mark.asyncio
async def test_stored_none_is_present(fs_store: FsStore):
    await fs_store.set("k", None)

    entry = await fs_store.get("k")
    assert entry is not None
    assert entry.value is None


@pytest.mark.asyncio
async def test_missing_value_file_reads_absent(fs_store: FsStore, base_path: Path):
    await fs_store.set("k", "v")
    (base_path / f"{FsStore.hash_key('k')}.value.pkl").unlink()

    assert await fs_store.get("k") is None
    assert await fs_store.get_meta("k") is not None


@pytest.mark.asyncio
async def test_corrupt_meta_reads_absent(fs_store: FsStore, base_path: Path):
    await fs_store.set("k", "v")
    (base_path / f"{FsStore.hash_key('k')}.meta.json").write_text("{broken")

    assert await fs_store.get("k") is None
    assert await fs_store.get_meta("k") is None
    assert await fs_store.meta() == []


@pytest.mark.asyncio
async def test_cyclic_value(fs_store: FsStore):
    node = {"name": "root"}
    node["self"] = node

    await fs_store.set("cycle", node)

    loaded = (await fs_store.get("cycle")).value
    assert loaded["self"] is loaded


@pytest.mark.asyncio
async def test_delete_removes_both_files(fs_store: FsStore, base_path: Path):
    await fs_store.set("k", "v")

    await fs_store.delete("k")
    await fs_store.delete("k")

    assert list(base_path.iterdir()) == []


@pytest.mark.asyncio
async def test_meta_and_clear(fs_store: FsStore, base_path: Path):
    assert await fs_store.meta() == []

    await fs_store.set("a", 1)
    await fs_store.set("b", 2, SetCacheOptions(expires_at=10))

    assert sorted(await fs_store.meta(), key=lambda m: m.key) == [
        CacheEntryMeta(key="a"),
        CacheEntryMeta(key="b", expires_at=10),
    ]

    await fs_store.clear()
    assert not base_path.exists()
    await fs_store.clear()


@pytest.mark.asyncio
async def test_failed_overwrite_does_not_pair_new_value_with_old_expiry(fs_store: FsStore, mocker):
    await fs_store.set("k", "old", SetCacheOptions(expires_at=None))
    real_write = fs_store._write_atomic

    def write_value_only(path, data):
        if path.name.endswith(".meta.json"):
            raise OSError("disk full")
        real_write(path, data)

    mocker.patch.object(fs_store, "_write_atomic", side_effect=write_value_only)

    with pytest.raises(OSError, match="disk full"):
        await fs_store.set("k", "new", SetCacheOptions(expires_at=10))

    assert await fs_store.get("k") is None
    assert await fs_store.meta() == []
