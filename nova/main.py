"""Main entry point for the nova CLI.

Sets up the Typer CLI application, performs dependency injection (Composition
Root), defines CLI commands, and delegates execution to the CommandHandler.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Coroutine, Dict, Optional

import typer
from typing_extensions import Annotated

from nova.core.cache import NovaCache
from nova.core.command_handler import CommandHandler
from nova.domain.models.cache import CacheOptions
from nova.infrastructure.cli.display import ConsoleDisplay
from nova.infrastructure.config.settings import (
    get_cache_path,
    get_config,
    get_default_ttl,
    get_store_kind,
    load_configuration,
)
from nova.infrastructure.monitoring.logger_setup import DEFAULT_LOG_FORMAT, parse_log_level, setup_logging
from nova.infrastructure.stores import STORE_KINDS, create_store

logger = logging.getLogger(__name__)


def create_dependencies(
    store_kind: Optional[str] = None,
    path: Optional[Path] = None,
    ttl: Optional[int] = None,
) -> Dict[str, Any]:
    """Creates and wires up all dependencies for one CLI invocation.

    Command-line values win over configuration values.
    """
    load_configuration()
    setup_logging(
        log_level=parse_log_level(get_config('logging.level', 'WARNING')),
        log_format=get_config('logging.format', DEFAULT_LOG_FORMAT),
        log_file=get_config('logging.file'),
    )

    dependencies: Dict[str, Any] = {}
    dependencies['ui'] = ConsoleDisplay()

    store_kind = store_kind or get_store_kind()
    path = path or get_cache_path()
    ttl = ttl if ttl is not None else get_default_ttl()
    logger.info(f"Initializing cache: store={store_kind}, path={path}, default_ttl={ttl}")

    dependencies['store'] = create_store(store_kind, path)
    dependencies['cache'] = NovaCache.from_options(CacheOptions(store=dependencies['store'], ttl=ttl))
    dependencies['command_handler'] = CommandHandler(
        cache=dependencies['cache'],
        ui=dependencies['ui'],
    )
    return dependencies


# --- Typer App Definition ---
app = typer.Typer(
    name="nova",
    help="nova: inspect and manage a TTL cache stored on disk.",
    add_completion=False,
)


def run_async(coro: Coroutine[Any, Any, bool]) -> None:
    """Runs a handler coroutine and maps a False result to exit code 1."""
    if not asyncio.run(coro):
        raise typer.Exit(code=1)


def _handler(ctx: typer.Context) -> CommandHandler:
    return ctx.obj['command_handler']


@app.callback()
def main_callback(
    ctx: typer.Context,
    store: Annotated[
        Optional[str],
        typer.Option("--store", "-s", help=f"Storage adapter ({', '.join(STORE_KINDS)}). Defaults to config.")
    ] = None,
    path: Annotated[
        Optional[Path],
        typer.Option("--path", "-p", file_okay=False, help="Cache directory for durable stores.")
    ] = None,
    ttl: Annotated[
        Optional[int],
        typer.Option("--default-ttl", help="Default TTL in milliseconds (0 disables expiry).")
    ] = None,
):
    """Selects the store and default TTL shared by every command."""
    try:
        ctx.obj = create_dependencies(store, path, ttl)
    except ValueError as e:
        ConsoleDisplay().display_error(str(e))
        raise typer.Exit(code=2)
    ctx.call_on_close(ctx.obj['store'].close)


@app.command()
def get(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Cache key.")],
):
    """Print the value stored under KEY (exit code 1 on a miss)."""
    run_async(_handler(ctx).handle_get(key))


@app.command(name="set")
def set_command(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Cache key.")],
    value: Annotated[str, typer.Argument(help="Value to store.")],
    ttl: Annotated[Optional[int], typer.Option("--ttl", "-t", help="TTL in milliseconds (0 = never expires).")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Decode VALUE as JSON before storing.")] = False,
):
    """Store VALUE under KEY."""
    run_async(_handler(ctx).handle_set(key, value, ttl=ttl, as_json=as_json))


@app.command()
def has(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Cache key.")],
):
    """Print whether KEY holds a live entry."""
    run_async(_handler(ctx).handle_has(key))


@app.command()
def delete(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Cache key.")],
):
    """Delete KEY. Missing keys are not an error."""
    run_async(_handler(ctx).handle_delete(key))


@app.command()
def clear(ctx: typer.Context):
    """Remove every entry."""
    run_async(_handler(ctx).handle_clear())


@app.command()
def sweep(ctx: typer.Context):
    """Delete entries whose TTL has passed."""
    run_async(_handler(ctx).handle_sweep())


@app.command()
def meta(
    ctx: typer.Context,
    live: Annotated[bool, typer.Option("--live", help="Hide expired entries.")] = False,
):
    """List stored keys with their expiry."""
    run_async(_handler(ctx).handle_meta(live_only=live))


def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()


if __name__ == "__main__":
    cli_entry_point()
