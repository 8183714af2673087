"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py), runs them against the
NovaCache instance and reports results through the UserInterface. Failures
are logged and shown to the user here; the cache itself never catches them.
"""

import json
import logging
from typing import Any, Optional

from nova.core.cache import NovaCache
from nova.domain.interfaces.user_interface import UserInterface

logger = logging.getLogger(__name__)


def format_value(value: Any) -> str:
    """Renders a cached value for display; strings are printed verbatim."""
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


class CommandHandler:
    """Handles incoming commands and delegates to the cache."""

    def __init__(
        self,
        cache: NovaCache,
        ui: UserInterface,
    ):
        self.cache = cache
        self.ui = ui

    async def handle_get(self, key: str) -> bool:
        """Handles the 'get' command. Returns False on a miss or failure."""
        logger.info(f"Handling 'get' command for key: {key}")
        try:
            value = await self.cache.get(key)
        except Exception as e:
            logger.error(f"Get command failed: {e}", exc_info=True)
            self.ui.display_error(f"Get failed: {e}")
            return False

        if value is None:
            self.ui.display_warning(f"No live entry for key '{key}'.")
            return False

        self.ui.display_output(format_value(value))
        return True

    async def handle_set(self, key: str, raw_value: str, ttl: Optional[int] = None, as_json: bool = False) -> bool:
        """Handles the 'set' command."""
        logger.info(f"Handling 'set' command for key: {key} (ttl={ttl}, json={as_json})")
        try:
            value = json.loads(raw_value) if as_json else raw_value
        except ValueError as e:
            self.ui.display_error(f"Value is not valid JSON: {e}")
            return False

        try:
            await self.cache.set(key, value, ttl)
            self.ui.display_info(f"Stored key '{key}'.")
            return True
        except Exception as e:
            logger.error(f"Set command failed: {e}", exc_info=True)
            self.ui.display_error(f"Set failed: {e}")
            return False

    async def handle_has(self, key: str) -> bool:
        """Handles the 'has' command."""
        logger.info(f"Handling 'has' command for key: {key}")
        try:
            exists = await self.cache.has(key)
        except Exception as e:
            logger.error(f"Has command failed: {e}", exc_info=True)
            self.ui.display_error(f"Has failed: {e}")
            return False
        self.ui.display_output("true" if exists else "false")
        return exists

    async def handle_delete(self, key: str) -> bool:
        """Handles the 'delete' command."""
        logger.info(f"Handling 'delete' command for key: {key}")
        try:
            await self.cache.delete(key)
            self.ui.display_info(f"Deleted key '{key}'.")
            return True
        except Exception as e:
            logger.error(f"Delete command failed: {e}", exc_info=True)
            self.ui.display_error(f"Delete failed: {e}")
            return False

    async def handle_clear(self) -> bool:
        """Handles the 'clear' command."""
        logger.info("Handling 'clear' command")
        try:
            await self.cache.clear()
            self.ui.display_info("Cache cleared successfully.")
            return True
        except Exception as e:
            logger.error(f"Failed to clear cache: {e}", exc_info=True)
            self.ui.display_error(f"Failed to clear cache: {e}")
            return False

    async def handle_sweep(self) -> bool:
        """Handles the 'sweep' command."""
        logger.info("Handling 'sweep' command")
        try:
            removed = await self.cache.sweep()
            self.ui.display_info(f"Removed {removed} expired entries.")
            return True
        except Exception as e:
            logger.error(f"Sweep command failed: {e}", exc_info=True)
            self.ui.display_error(f"Sweep failed: {e}")
            return False

    async def handle_meta(self, live_only: bool = False) -> bool:
        """Handles the 'meta' command, optionally hiding expired entries."""
        logger.info(f"Handling 'meta' command (live_only={live_only})")
        try:
            entries = await self.cache.meta()
        except Exception as e:
            logger.error(f"Meta command failed: {e}", exc_info=True)
            self.ui.display_error(f"Meta failed: {e}")
            return False

        now = self.cache.now()
        if live_only:
            entries = [entry for entry in entries if not self.cache.is_expired(entry)]
        self.ui.display_meta(sorted(entries, key=lambda entry: entry.key), now)
        return True
