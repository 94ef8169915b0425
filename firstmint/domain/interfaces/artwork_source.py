"""Interface for sources of a wallet's first minted artwork.

This is the contract an image-compositing layer depends on: it calls
`fetch_first_minted_artwork` once per incoming request, renders a
placeholder when the result is None, and answers with a server error
when the call raises.
"""

import abc
from typing import Optional

from firstmint.domain.models.common import FirstMintedArtwork


class ArtworkSource(abc.ABC):
    """Abstract Base Class for looking up a wallet's first minted artwork."""

    @abc.abstractmethod
    async def fetch_first_minted_artwork(
        self, address: str, max_retries: Optional[int] = None
    ) -> Optional[FirstMintedArtwork]:
        """Fetches the preview media of the first token collected by `address`.

        Args:
            address: The wallet address (or profile identifier) to query.
            max_retries: Retry bound for this call. Uses the source default if None.

        Returns:
            The artwork, or None when the wallet has no collected token
            with a downloadable preview.

        Raises:
            InvalidInputError: If the address is empty or not a string.
            FirstMintError: If the lookup failed after all retries.
        """
        pass
