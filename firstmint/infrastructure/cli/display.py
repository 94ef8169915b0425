import json
import logging
from typing import Any, Optional

from rich.box import HEAVY, ROUNDED, SIMPLE
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from firstmint.domain.interfaces.user_interface import UserInterface
from firstmint.domain.models.common import FirstMintedArtwork

logger = logging.getLogger(__name__)


class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def display_artwork(self, artwork: Optional[FirstMintedArtwork], **kwargs: Any) -> None:
        """Shows the artwork URI in a panel, or a notice when nothing was found.

        Args:
            artwork: The fetched artwork, or None.
            **kwargs: `as_json=True` prints the raw result instead.
        """
        if kwargs.get("as_json"):
            self.display_json(artwork)
            return

        if artwork is None:
            self.display_info("No minted or collected artwork with a preview was found.")
            return

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold cyan", no_wrap=True)
        table.add_column(style="white")
        table.add_row("Address", artwork["address"])
        table.add_row("Preview", artwork["downloadableUri"])
        self.console.print(Panel(
            table,
            title="[bold green]First minted artwork[/bold green]",
            border_style="green",
            box=ROUNDED,
            padding=(0, 1),
        ))

    def display_json(self, payload: Any) -> None:
        # Plain print keeps the output machine-readable (no markup, no wrapping).
        self.console.print(json.dumps(payload), markup=False, highlight=False, soft_wrap=True)

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message in a distinct style."""
        self.console.print(Panel(
            Text(error_message, style="white"),
            title="[bold red]Error[/bold red]",
            border_style="red",
            box=HEAVY,
            padding=(0, 1),
        ))

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        self.console.print(Panel(
            Text(warning_message, style="white"),
            title="[bold yellow]Warning[/bold yellow]",
            border_style="yellow",
            box=SIMPLE,
            padding=(0, 1),
        ))

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        self.console.print(Panel(
            Text(info_message, style="white"),
            title="[bold blue]Info[/bold blue]",
            border_style="blue",
            box=SIMPLE,
            padding=(0, 1),
        ))
