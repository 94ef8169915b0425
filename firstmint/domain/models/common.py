"""Defines common Value Objects used across the fetch pipeline.

These objects represent simple values or concepts like wallet addresses,
media URIs and classified attempt outcomes, ensuring consistency and
type safety between the layers.
"""

import enum
from dataclasses import dataclass
from typing import NewType, TypedDict

# === Core Value Objects ===

WalletAddress = NewType("WalletAddress", str)       # Wallet address or profile identifier
DownloadableUri = NewType("DownloadableUri", str)   # Preview media location (ipfs://, https://)


class FirstMintedArtwork(TypedDict):
    """Preview media of the first collected/minted token of a wallet."""
    downloadableUri: DownloadableUri
    address: WalletAddress


# === Resilience Context ===

class ErrorKind(enum.Enum):
    """Classified outcome of a single failed attempt."""

    INVALID_INPUT = "invalid_input"
    RATE_LIMITED = "rate_limited"      # HTTP 429
    FORBIDDEN = "forbidden"            # HTTP 403, treated as soft rate limiting
    SERVER_ERROR = "server_error"      # HTTP >= 500
    NETWORK_ERROR = "network_error"    # request sent, no response
    TIMEOUT = "timeout"                # client-side deadline exceeded
    NON_RETRYABLE = "non_retryable"

    @property
    def is_retryable(self) -> bool:
        return self in _RETRYABLE_KINDS


_RETRYABLE_KINDS = frozenset({
    ErrorKind.RATE_LIMITED,
    ErrorKind.FORBIDDEN,
    ErrorKind.SERVER_ERROR,
    ErrorKind.NETWORK_ERROR,
    ErrorKind.TIMEOUT,
})


@dataclass(frozen=True)
class RetryAttempt:
    """Record of one failed attempt within a single fetch call.

    Attributes:
        attempt_index: Zero-based attempt number (0..max_retries).
        kind: How the failure was classified.
        wait_ms: Backoff computed for this attempt, 0 when no retry followed.
    """
    attempt_index: int
    kind: ErrorKind
    wait_ms: int
