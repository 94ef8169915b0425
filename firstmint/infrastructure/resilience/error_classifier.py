"""Classification of failed attempts and backoff computation.

Maps an HTTP response or a transport exception to an `ErrorKind`, and
works out how long to wait before the next attempt:

    429            server hint ("try again after N seconds" in `detail`,
                   then `Retry-After`), else 2^attempt * 1000 ms
    403            2^attempt * 2000 ms
    5xx / network  2^attempt * 1000 ms
    / timeout
"""

import logging
import math
import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional

import httpx

from firstmint.domain.models.common import ErrorKind

logger = logging.getLogger(__name__)

DEFAULT_BACKOFF_BASE_MS = 1000
FORBIDDEN_BACKOFF_BASE_MS = 2000
# Longer server hints are treated as unusable and fall back to backoff.
MAX_RETRY_HINT_MS = 60 * 60 * 1000

_TRY_AGAIN_PATTERN = re.compile(r"try again after\s+(\d+(?:\.\d+)?)\s*seconds?", re.IGNORECASE)


def classify_response(response: httpx.Response) -> ErrorKind:
    """Classifies a non-2xx response."""
    status = response.status_code
    if status == 429:
        return ErrorKind.RATE_LIMITED
    if status == 403:
        return ErrorKind.FORBIDDEN
    if status >= 500:
        return ErrorKind.SERVER_ERROR
    return ErrorKind.NON_RETRYABLE


def classify_exception(exc: BaseException) -> ErrorKind:
    """Classifies an exception raised while sending a request."""
    # TimeoutException is itself a TransportError, so check it first.
    if isinstance(exc, httpx.TimeoutException):
        return ErrorKind.TIMEOUT
    # Raised before anything is sent; retrying cannot help.
    if isinstance(exc, (httpx.UnsupportedProtocol, httpx.LocalProtocolError)):
        return ErrorKind.NON_RETRYABLE
    if isinstance(exc, httpx.TransportError):
        return ErrorKind.NETWORK_ERROR
    return ErrorKind.NON_RETRYABLE


def exponential_backoff_ms(attempt: int, base_ms: int = DEFAULT_BACKOFF_BASE_MS) -> int:
    return (2 ** attempt) * base_ms


def _detail_from_body(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("detail"), str):
        return body["detail"]
    return None


def _seconds_to_ms(seconds: float) -> Optional[int]:
    millis = seconds * 1000
    if not math.isfinite(millis) or millis > MAX_RETRY_HINT_MS:
        return None
    return max(0, round(millis))


def _parse_retry_after(value: str) -> Optional[int]:
    value = value.strip()
    try:
        seconds = float(value)
    except ValueError:
        seconds = None
    if seconds is not None:
        return _seconds_to_ms(seconds)

    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=timezone.utc)
    delta = (retry_at - datetime.now(timezone.utc)).total_seconds()
    return _seconds_to_ms(delta)


def parse_retry_hint_ms(response: httpx.Response) -> Optional[int]:
    """Reads the server's retry hint from a 429 response.

    The `detail` field of the body wins over the `Retry-After` header.

    Returns:
        The hinted wait in milliseconds, or None if the response carries no
        usable hint.
    """
    detail = _detail_from_body(response)
    if detail:
        match = _TRY_AGAIN_PATTERN.search(detail)
        if match:
            hint = _seconds_to_ms(float(match.group(1)))
            if hint is not None:
                logger.debug(f"Retry hint from detail: {detail!r}")
                return hint
            logger.debug(f"Ignoring out-of-range retry hint in detail: {detail!r}")

    retry_after = response.headers.get("retry-after")
    if retry_after:
        hint = _parse_retry_after(retry_after)
        if hint is not None:
            logger.debug(f"Retry hint from Retry-After header: {retry_after!r}")
            return hint
        logger.debug(f"Ignoring unparseable Retry-After header: {retry_after!r}")
    return None


def compute_wait_ms(kind: ErrorKind, attempt: int, response: Optional[httpx.Response] = None) -> int:
    """Backoff before retrying an attempt that failed with `kind`.

    Args:
        kind: The classified failure.
        attempt: Zero-based index of the attempt that failed.
        response: The HTTP response, when the server answered.

    Returns:
        Milliseconds to wait. Non-retryable kinds wait 0.
    """
    if kind is ErrorKind.RATE_LIMITED:
        hint = parse_retry_hint_ms(response) if response is not None else None
        return hint if hint is not None else exponential_backoff_ms(attempt)
    if kind is ErrorKind.FORBIDDEN:
        return exponential_backoff_ms(attempt, FORBIDDEN_BACKOFF_BASE_MS)
    if kind.is_retryable:
        return exponential_backoff_ms(attempt)
    return 0
