"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py), delegates the work
to the FirstMintService and renders outcomes through the UserInterface.
"""

import logging
from typing import Optional

from firstmint.core.exceptions import FirstMintError, InvalidInputError
from firstmint.core.services.first_mint_service import FirstMintService
from firstmint.domain.interfaces.user_interface import UserInterface
from firstmint.infrastructure.zora.graphql_request import build_request

logger = logging.getLogger(__name__)


class CommandHandler:
    """Handles incoming commands and delegates to appropriate services."""

    def __init__(self, first_mint_service: FirstMintService, ui: UserInterface):
        self.first_mint_service = first_mint_service
        self.ui = ui

    async def handle_fetch(self, address: str, max_retries: Optional[int] = None, as_json: bool = False) -> bool:
        """Handles the 'fetch' command.

        Returns:
            True if the lookup completed (artwork found or not), False on error.
        """
        logger.info(f"Handling 'fetch' command for address: {address}")
        try:
            artwork = await self.first_mint_service.fetch_first_minted_artwork(address, max_retries=max_retries)
        except FirstMintError as e:
            logger.error(f"'fetch' failed for {address} ({e.kind.value}): {e}")
            self.ui.display_error(str(e))
            return False

        self.ui.display_artwork(artwork, as_json=as_json)
        return True

    def handle_show_request(self, address: str) -> bool:
        """Handles the 'show-request' command: prints the payload without sending it."""
        service = self.first_mint_service
        try:
            request = build_request(address, endpoint=service.endpoint, user_agent=service.user_agent)
        except InvalidInputError as e:
            self.ui.display_error(str(e))
            return False
        self.ui.display_json({"url": request.url, "headers": request.headers, "body": request.body})
        return True
