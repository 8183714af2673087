import logging
from datetime import datetime
from typing import Any, List

from rich.box import HEAVY, ROUNDED, SIMPLE
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from nova.core.expiration import is_expired
from nova.domain.interfaces.user_interface import UserInterface
from nova.domain.models.cache import CacheEntryMeta, Timestamp

logger = logging.getLogger(__name__)


def format_timestamp(timestamp_ms: Timestamp) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d %H:%M:%S")


class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self):
        self._console = Console()

    @property
    def console(self):
        """Get the Rich console instance for direct operations."""
        return self._console

    @console.setter
    def console(self, console) -> None:
        self._console = console

    def display_output(self, output: str, **kwargs: Any) -> None:
        """Prints a raw value without markup so it can be piped."""
        self.console.print(output, markup=False, highlight=False)

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        panel = Panel(
            Text(error_message, style="white"),
            title="[bold red]Error[/bold red]",
            border_style="red",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        panel = Panel(
            Text(info_message, style="white"),
            title="[bold blue]Info[/bold blue]",
            border_style="blue",
            box=SIMPLE,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        logger.warning(f"Display warning: {warning_message}")
        panel = Panel(
            Text(warning_message, style="white"),
            title="[bold yellow]Warning[/bold yellow]",
            border_style="yellow",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_meta(self, entries: List[CacheEntryMeta], now: Timestamp) -> None:
        """Displays cache entry metadata in a table.

        Args:
            entries: Metadata rows to show.
            now: Current time in epoch milliseconds.
        """
        logger.debug(f"Displaying metadata for {len(entries)} cache entries")

        if not entries:
            self.display_info("Cache is empty.")
            return

        table = Table(show_header=True, box=ROUNDED, border_style="cyan", padding=(0, 1))
        table.add_column("Key", style="bold")
        table.add_column("Expires At", style="dim")
        table.add_column("Status")

        for entry in entries:
            if entry.expires_at is None:
                expires, status = "never", "[green]live[/green]"
            elif is_expired(entry, now):
                expires, status = format_timestamp(entry.expires_at), "[red]expired[/red]"
            else:
                expires, status = format_timestamp(entry.expires_at), "[green]live[/green]"
            table.add_row(Text(entry.key), expires, status)

        self.console.print(table)
