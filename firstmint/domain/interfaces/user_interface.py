"""Interface for presenting results to the user.

Defines the contract for displaying fetched artwork, information, warnings
and errors, allowing different UI implementations (e.g., console, JSON).
"""

import abc
from typing import Any, Optional

from firstmint.domain.models.common import FirstMintedArtwork


class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_artwork(self, artwork: Optional[FirstMintedArtwork], **kwargs: Any) -> None:
        """Displays the outcome of an artwork lookup.

        Args:
            artwork: The fetched artwork, or None when nothing was found.
            **kwargs: Additional arguments for formatting (e.g., as_json).
        """
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user.

        Args:
            error_message: The error message string.
            **kwargs: Additional arguments for formatting.
        """
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
    def display_json(self, payload: Any) -> None:
        """Displays a JSON-serialisable payload (`--json`, `show-request`)."""
        pass
