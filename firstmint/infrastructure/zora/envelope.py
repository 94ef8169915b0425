"""Unwrapping of the ProfileAndMints response envelope.

The interesting leaf sits at
data.profile.collectedCollectionsOrTokens.edges[0].node.media.previewImage.previewImage.downloadableUri.
A missing link anywhere in that chain means "no data", not a malformed
response.
"""

import logging
from typing import Any, Optional

from firstmint.domain.models.common import DownloadableUri, FirstMintedArtwork, WalletAddress

logger = logging.getLogger(__name__)

_EDGES_PATH = ("data", "profile", "collectedCollectionsOrTokens", "edges")
_URI_PATH = ("node", "media", "previewImage", "previewImage", "downloadableUri")


def _dig(value: Any, path: tuple) -> Any:
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def extract_first_artwork(payload: Any, address: str) -> Optional[FirstMintedArtwork]:
    """Returns the first edge's preview media, or None when there is none.

    Args:
        payload: The decoded JSON body of a 2xx response.
        address: The queried address, echoed back in the result.
    """
    edges = _dig(payload, _EDGES_PATH)
    if not isinstance(edges, list) or not edges:
        logger.info(f"No collected tokens found for address: {address}")
        return None

    downloadable_uri = _dig(edges[0], _URI_PATH)
    if not isinstance(downloadable_uri, str) or not downloadable_uri:
        logger.info(f"No downloadable URI found for first minted artwork of address: {address}")
        return None

    return FirstMintedArtwork(
        downloadableUri=DownloadableUri(downloadable_uri),
        address=WalletAddress(address),
    )
