import pytest
from typer.testing import CliRunner

from nova.core.cache import NovaCache
from nova.infrastructure.config import settings
from nova.infrastructure.stores import DiskCacheStore, MemoryStore, create_store

START_MS = 1_700_000_000_000


class FakeClock:
    """Controllable millisecond clock for expiry tests."""

    def __init__(self, start: int = START_MS):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(params=["memory", "fs", "disk"])
def store(request, tmp_path):
    """Every shipped storage adapter, each rooted in its own temp directory."""
    store = create_store(request.param, tmp_path / "cache")
    yield store
    if isinstance(store, DiskCacheStore):
        store.close()


@pytest.fixture
def cache(store, clock):
    """NovaCache over each adapter, driven by the fake clock."""
    return NovaCache(store=store, clock=clock)


@pytest.fixture
def memory_cache(clock):
    return NovaCache(store=MemoryStore(), clock=clock)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keeps tests away from the user's ~/.nova config and any NOVA_ env vars."""
    monkeypatch.setattr(settings, "_config", {})
    monkeypatch.setattr(settings, "_test_config", {})
    monkeypatch.setattr(settings, "_loaded", False)
    monkeypatch.setattr(settings, "DEFAULT_CONFIG_FILE", tmp_path / "no-config.yaml")
    for name in ("NOVA_CACHE_STORE", "NOVA_CACHE_PATH", "NOVA_CACHE_TTL_MS", "NOVA_LOGGING_LEVEL", "NOVA_LOGGING_FILE"):
        monkeypatch.delenv(name, raising=False)
