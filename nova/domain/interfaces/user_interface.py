"""Interface for presenting cache command results to the user.

Defines the contract for displaying values, errors, warnings, informational
messages and entry metadata, allowing different UI implementations.
"""

import abc
from typing import Any, List

from nova.domain.models.cache import CacheEntryMeta, Timestamp


class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_output(self, output: str, **kwargs: Any) -> None:
        """Displays standard output to the user.

        Args:
            output: The string to display (e.g., a cached value).
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user."""
        pass

    @abc.abstractmethod
    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message to the user."""
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user."""
        pass

    @abc.abstractmethod
    def display_meta(self, entries: List[CacheEntryMeta], now: Timestamp) -> None:
        """Displays cache entry metadata as a table.

        Args:
            entries: Metadata to list.
            now: Current time in epoch milliseconds, used to label expired rows.
        """
        pass
