"""Application service answering "what did wallet X first mint/collect?".

Ties together the request builder, the Zora transport, the shared rate
limiter (through ApiRetryService) and envelope unwrapping. This is the
`ArtworkSource` an image-compositing layer consumes.
"""

import logging
from typing import List, Optional

from firstmint.core.exceptions import NonRetryableApiError
from firstmint.domain.interfaces.artwork_source import ArtworkSource
from firstmint.domain.models.common import FirstMintedArtwork, RetryAttempt
from firstmint.infrastructure.resilience.api_retry import ApiRetryService
from firstmint.infrastructure.zora.envelope import extract_first_artwork
from firstmint.infrastructure.zora.graphql_request import ZORA_GRAPHQL_ENDPOINT, build_request
from firstmint.infrastructure.zora.zora_client import ZoraClient

logger = logging.getLogger(__name__)


class FirstMintService(ArtworkSource):
    """Fetches the first minted artwork of a wallet from the Zora API."""

    def __init__(
        self,
        zora_client: ZoraClient,
        api_retry_service: ApiRetryService,
        endpoint: str = ZORA_GRAPHQL_ENDPOINT,
        user_agent: Optional[str] = None,
    ):
        self.zora_client = zora_client
        self.api_retry_service = api_retry_service
        self.endpoint = endpoint
        self.user_agent = user_agent

    async def fetch_first_minted_artwork(
        self, address: str, max_retries: Optional[int] = None
    ) -> Optional[FirstMintedArtwork]:
        """Fetches the preview media of the first token collected by `address`.

        Absence of data (no profile, no edges, no preview URI) is a None
        result, never an error.

        Raises:
            InvalidInputError: Before any rate-limit or network work.
            RateLimitExceededError, ForbiddenError, TransientNetworkError,
            NonRetryableApiError: The terminal error once retries are over.
        """
        # Validation happens here, ahead of the rate limiter.
        request = build_request(address, endpoint=self.endpoint, user_agent=self.user_agent)
        logger.info(f"Fetching first minted artwork for address: {address}")

        attempt_log: List[RetryAttempt] = []
        response = await self.api_retry_service.execute_with_retry(
            lambda: self.zora_client.post(request),
            address=address,
            max_retries=max_retries,
            attempt_log=attempt_log,
        )

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Zora API returned a non-JSON body for {address}: {e}")
            raise NonRetryableApiError.for_address(
                address, f"malformed JSON response: {e}", attempts=len(attempt_log) + 1,
                status_code=response.status_code,
            ) from e
        if not isinstance(payload, dict):
            raise NonRetryableApiError.for_address(
                address, "response body is not a JSON object", attempts=len(attempt_log) + 1,
                status_code=response.status_code,
            )

        if payload.get("errors"):
            logger.warning(f"Zora API reported GraphQL errors for {address}: {payload['errors']}")

        artwork = extract_first_artwork(payload, address)
        if artwork is not None:
            logger.info(f"First minted artwork for {address}: {artwork['downloadableUri']}")
        return artwork
