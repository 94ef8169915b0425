"""Main entry point for the firstmint application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import typer
from typing_extensions import Annotated

from firstmint.core.command_handler import CommandHandler
from firstmint.core.services.first_mint_service import FirstMintService
from firstmint.infrastructure.cli.display import ConsoleDisplay
from firstmint.infrastructure.config.settings import (
    DEFAULT_LOG_FORMAT,
    get_config,
    get_graphql_endpoint,
    get_max_retries,
    get_rate_limit_max_requests,
    get_rate_limit_window_seconds,
    get_request_timeout,
    get_user_agent,
    load_configuration,
)
from firstmint.infrastructure.monitoring.logger_setup import resolve_log_level, setup_logging
from firstmint.infrastructure.resilience.api_retry import ApiRetryService
from firstmint.infrastructure.resilience.rate_limiter import WindowRateLimiter
from firstmint.infrastructure.zora.zora_client import ZoraClient

logger = logging.getLogger(__name__)

# --- Dependency Injection Container (Manual) ---

_dependencies: Dict[str, Any] = {}
_options: Dict[str, Any] = {}


def create_dependencies(log_level: Optional[str] = None) -> Dict[str, Any]:
    """Creates and wires up all dependencies for the application.

    This acts as the Composition Root. A single WindowRateLimiter is shared
    by everything that talks to the API.
    """
    load_configuration()
    level_name = log_level or str(get_config('logging.level', 'INFO'))
    setup_logging(
        log_level=resolve_log_level(level_name),
        log_format=get_config('logging.format', DEFAULT_LOG_FORMAT),
        log_file=get_config('logging.file'),
    )
    logger.info("Initializing application dependencies...")

    dependencies: Dict[str, Any] = {}
    dependencies['ui'] = ConsoleDisplay()
    dependencies['rate_limiter'] = WindowRateLimiter(
        max_requests=get_rate_limit_max_requests(),
        window_seconds=get_rate_limit_window_seconds(),
    )
    dependencies['api_retry_service'] = ApiRetryService(
        rate_limiter=dependencies['rate_limiter'],
        max_retries=get_max_retries(),
    )
    dependencies['zora_client'] = ZoraClient(timeout_seconds=get_request_timeout())
    dependencies['first_mint_service'] = FirstMintService(
        zora_client=dependencies['zora_client'],
        api_retry_service=dependencies['api_retry_service'],
        endpoint=get_graphql_endpoint(),
        user_agent=get_user_agent(),
    )
    dependencies['command_handler'] = CommandHandler(
        first_mint_service=dependencies['first_mint_service'],
        ui=dependencies['ui'],
    )
    logger.info("All dependencies initialized successfully.")
    return dependencies


def get_dependencies() -> Dict[str, Any]:
    """Returns the wired-up dependencies, creating them on first use."""
    if not _dependencies:
        try:
            _dependencies.update(create_dependencies(log_level=_options.get('log_level')))
        except ValueError as e:
            # Invalid settings (negative retries, non-positive quota...)
            ConsoleDisplay().display_error(f"Invalid configuration: {e}")
            raise typer.Exit(code=2)
    return _dependencies


# --- Typer App Definition ---
app = typer.Typer(
    name="firstmint",
    help="Find the first artwork a wallet minted or collected on Zora.",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", "-l", help="Log level (DEBUG, INFO, WARNING, ERROR). Overrides LOGGING_LEVEL."),
    ] = None,
):
    """Query the Zora indexing API for a wallet's first minted artwork."""
    _options['log_level'] = log_level


@app.command()
def fetch(
    address: Annotated[str, typer.Argument(help="Wallet address or profile identifier.")],
    max_retries: Annotated[
        Optional[int],
        typer.Option("--max-retries", "-r", min=0, help="Retries after the first attempt. Uses config default if not set."),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Print the result as JSON.")] = False,
):
    """Fetch the preview URI of the first artwork ADDRESS minted or collected."""
    handler: CommandHandler = get_dependencies()['command_handler']
    if not asyncio.run(handler.handle_fetch(address, max_retries=max_retries, as_json=json_output)):
        raise typer.Exit(code=1)


@app.command(name="show-request")
def show_request(
    address: Annotated[str, typer.Argument(help="Wallet address or profile identifier.")],
):
    """Print the GraphQL request that would be sent for ADDRESS, without sending it."""
    handler: CommandHandler = get_dependencies()['command_handler']
    if not handler.handle_show_request(address):
        raise typer.Exit(code=1)


# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()


if __name__ == "__main__":
    cli_entry_point()
