import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from nova.infrastructure.stores import DiskCacheStore
from nova.main import app


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger on every invocation."""
    root_logger = logging.getLogger()
    saved_handlers, saved_level = root_logger.handlers[:], root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in saved_handlers:
            root_logger.removeHandler(handler)
    for handler in saved_handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(saved_level)


@pytest.fixture(params=["fs", "disk"])
def store_args(request, tmp_path: Path):
    """Global options pointing the CLI at a throwaway cache directory."""
    return ["--store", request.param, "--path", str(tmp_path / "cli-cache")]


def test_set_get_delete_flow(runner: CliRunner, store_args):
    result = runner.invoke(app, store_args + ["set", "greeting", "hello world"])
    assert result.exit_code == 0, f"CLI command failed: {result.stdout}"

    result = runner.invoke(app, store_args + ["get", "greeting"])
    assert result.exit_code == 0
    assert "hello world" in result.stdout

    result = runner.invoke(app, store_args + ["has", "greeting"])
    assert result.exit_code == 0
    assert "true" in result.stdout

    result = runner.invoke(app, store_args + ["delete", "greeting"])
    assert result.exit_code == 0

    result = runner.invoke(app, store_args + ["get", "greeting"])
    assert result.exit_code == 1
    assert "No live entry" in result.stdout


def test_json_value(runner: CliRunner, store_args):
    runner.invoke(app, store_args + ["set", "--json", "cfg", '{"retries": 3}'])

    result = runner.invoke(app, store_args + ["get", "cfg"])

    assert result.exit_code == 0
    assert '{"retries": 3}' in result.stdout


def test_expired_entry_and_meta(runner: CliRunner, store_args):
    runner.invoke(app, store_args + ["set", "stale", "v", "--ttl=-1"])
    runner.invoke(app, store_args + ["set", "fresh", "v"])

    result = runner.invoke(app, store_args + ["meta"])
    assert result.exit_code == 0
    assert "stale" in result.stdout
    assert "expired" in result.stdout
    assert "fresh" in result.stdout

    result = runner.invoke(app, store_args + ["meta", "--live"])
    assert "stale" not in result.stdout
    assert "fresh" in result.stdout

    result = runner.invoke(app, store_args + ["has", "stale"])
    assert result.exit_code == 1
    assert "false" in result.stdout

    result = runner.invoke(app, store_args + ["sweep"])
    assert result.exit_code == 0
    assert "Removed 1 expired entries." in result.stdout


def test_default_ttl_option(runner: CliRunner, store_args):
    runner.invoke(app, store_args + ["--default-ttl=-1", "set", "k", "v"])

    result = runner.invoke(app, store_args + ["get", "k"])

    assert result.exit_code == 1


def test_clear(runner: CliRunner, store_args):
    runner.invoke(app, store_args + ["set", "a", "1"])
    runner.invoke(app, store_args + ["set", "b", "2"])

    result = runner.invoke(app, store_args + ["clear"])
    assert result.exit_code == 0

    result = runner.invoke(app, store_args + ["meta"])
    assert "Cache is empty." in result.stdout


def test_store_from_config(runner: CliRunner, tmp_path: Path, monkeypatch):
    monkeypatch.setenv("NOVA_CACHE_STORE", "fs")
    monkeypatch.setenv("NOVA_CACHE_PATH", str(tmp_path / "from-env"))

    result = runner.invoke(app, ["set", "k", "v"])

    assert result.exit_code == 0
    assert any((tmp_path / "from-env").glob("*.meta.json"))


def test_unknown_store(runner: CliRunner, tmp_path: Path):
    result = runner.invoke(app, ["--store", "redis", "--path", str(tmp_path), "get", "k"])

    assert result.exit_code == 2
    assert "Unknown store kind" in result.stdout


def test_store_is_closed_after_command(runner: CliRunner, tmp_path: Path, mocker):
    close_spy = mocker.spy(DiskCacheStore, "close")

    result = runner.invoke(app, ["--store", "disk", "--path", str(tmp_path / "disk"), "set", "k", "v"])

    assert result.exit_code == 0
    assert close_spy.call_count == 1
