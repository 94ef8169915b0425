"""Error taxonomy for first-minted-artwork lookups.

Every error carries an `ErrorKind` so callers can tell retryable from
terminal failures without matching on messages. Only the final error of a
fetch call ever reaches the caller; intermediate attempts are handled by
the retry service.
"""

from typing import List, Optional

from firstmint.domain.models.common import ErrorKind, RetryAttempt


class FirstMintError(Exception):
    """Base class for all errors raised by firstmint."""

    kind: ErrorKind = ErrorKind.NON_RETRYABLE

    def __init__(
        self,
        message: str,
        *,
        address: Optional[str] = None,
        attempts: int = 0,
        status_code: Optional[int] = None,
        kind: Optional[ErrorKind] = None,
    ):
        super().__init__(message)
        self.address = address
        self.attempts = attempts
        self.status_code = status_code
        self.attempt_log: List[RetryAttempt] = []
        if kind is not None:
            self.kind = kind

    @classmethod
    def for_address(
        cls,
        address: str,
        cause: object,
        *,
        attempts: int,
        status_code: Optional[int] = None,
        kind: Optional[ErrorKind] = None,
    ) -> "FirstMintError":
        """Builds the terminal error for `address`, naming the last observed cause."""
        return cls(
            f"Failed to fetch first minted artwork for address {address}: {cause}",
            address=address,
            attempts=attempts,
            status_code=status_code,
            kind=kind,
        )


class InvalidInputError(FirstMintError):
    """Raised when the address is missing, empty or not a string. Never retried."""
    kind = ErrorKind.INVALID_INPUT


class RateLimitExceededError(FirstMintError):
    """Raised when the API kept answering 429 until retries ran out."""
    kind = ErrorKind.RATE_LIMITED


class TransientNetworkError(FirstMintError):
    """Raised when connection failures, timeouts or 5xx outlast the retry bound."""
    kind = ErrorKind.SERVER_ERROR


class NonRetryableApiError(FirstMintError):
    """Raised for any other HTTP error or a malformed success response."""
    kind = ErrorKind.NON_RETRYABLE


class ForbiddenError(NonRetryableApiError):
    """Raised when the API kept answering 403 until retries ran out."""
    kind = ErrorKind.FORBIDDEN
