"""Thin async transport for the Zora universal GraphQL API.

Sends exactly one HTTP POST per call. Retries and rate limiting are
handled by the caller (ApiRetryService).
"""

import logging
from typing import Optional

import httpx

from firstmint.infrastructure.zora.graphql_request import GraphQLRequest

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class ZoraClient:
    """Posts GraphQL requests with a fixed per-attempt timeout."""

    def __init__(
        self,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initializes the client.

        Args:
            timeout_seconds: Deadline for a single attempt.
            transport: Optional httpx transport (e.g., httpx.MockTransport in tests).
        """
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        logger.info(f"ZoraClient initialized with timeout={timeout_seconds}s")

    async def post(self, request: GraphQLRequest) -> httpx.Response:
        """Performs one POST attempt.

        Returns:
            The response, whatever its status code.

        Raises:
            httpx.TimeoutException: If the attempt exceeded the timeout.
            httpx.TransportError: If the request went out but no response came back.
        """
        async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
            logger.debug(f"POST {request.url}")
            return await client.post(request.url, json=request.body, headers=request.headers)
