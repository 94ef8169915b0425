"""Service for executing API calls with automatic retries.

Every attempt passes through the local rate limiter first. Failed attempts
are classified (429, 403, 5xx, network, timeout, anything else) and the
retryable ones are retried after an error-specific backoff, up to
`max_retries` retries. Only the final error leaves this service.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, List, Optional, Type

import httpx

from firstmint.core.exceptions import (
    FirstMintError,
    ForbiddenError,
    NonRetryableApiError,
    RateLimitExceededError,
    TransientNetworkError,
)
from firstmint.domain.events.api_events import (
    FetchDeferred,
    FetchFailed,
    FetchInitiated,
    FetchSucceeded,
    RetryScheduled,
)
from firstmint.domain.models.common import ErrorKind, RetryAttempt
from firstmint.infrastructure.resilience.error_classifier import (
    classify_exception,
    classify_response,
    compute_wait_ms,
)
from firstmint.infrastructure.resilience.rate_limiter import WindowRateLimiter

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3

_TERMINAL_ERRORS: dict = {
    ErrorKind.RATE_LIMITED: RateLimitExceededError,
    ErrorKind.FORBIDDEN: ForbiddenError,
    ErrorKind.SERVER_ERROR: TransientNetworkError,
    ErrorKind.NETWORK_ERROR: TransientNetworkError,
    ErrorKind.TIMEOUT: TransientNetworkError,
}


def dispatch_event(event: Any) -> None:
    logger.debug(f"EVENT: {event}")


class ApiRetryService:
    """Handles API call execution with rate limiting and classified retries."""

    def __init__(
        self,
        rate_limiter: WindowRateLimiter,
        max_retries: int = DEFAULT_MAX_RETRIES,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initializes the ApiRetryService.

        Args:
            rate_limiter: The shared rate limiter gating every attempt.
            max_retries: Default number of retries after the first attempt.
            sleep: Coroutine function used for backoff waits.
        """
        if max_retries < 0:
            raise ValueError("max_retries must not be negative.")
        self.rate_limiter = rate_limiter
        self.max_retries = max_retries
        self._sleep = sleep
        logger.info(f"ApiRetryService initialized: max_retries={max_retries}")

    async def execute_with_retry(
        self,
        func: Callable[[], Awaitable[httpx.Response]],
        *,
        address: str,
        max_retries: Optional[int] = None,
        attempt_log: Optional[List[RetryAttempt]] = None,
    ) -> httpx.Response:
        """Executes `func` until it returns a 2xx response or retries run out.

        Args:
            func: Coroutine function performing exactly one HTTP attempt.
            address: The wallet address being fetched, for logs and errors.
            max_retries: Retry bound for this call (defaults to the service's).
            attempt_log: Optional list receiving one RetryAttempt per failed attempt.

        Returns:
            The first successful (2xx) response.

        Raises:
            RateLimitExceededError: 429 on every attempt.
            ForbiddenError: 403 on every attempt.
            TransientNetworkError: 5xx, connection failures or timeouts outlasted the bound.
            NonRetryableApiError: Any other failure, on the attempt it occurred.
        """
        retries = self.max_retries if max_retries is None else max_retries
        if retries < 0:
            raise ValueError("max_retries must not be negative.")

        attempts: List[RetryAttempt] = attempt_log if attempt_log is not None else []
        last_exception: Optional[Exception] = None
        last_response: Optional[httpx.Response] = None
        last_kind = ErrorKind.NON_RETRYABLE

        for attempt in range(retries + 1):
            # The gate is re-checked on every attempt, retries included.
            deferred = await self.rate_limiter.wait_for_permission()
            if deferred > 0:
                dispatch_event(FetchDeferred(address=address, wait_time_seconds=deferred))

            dispatch_event(FetchInitiated(address=address, attempt_number=attempt + 1))
            start_time = time.perf_counter()
            try:
                response = await func()
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                last_exception = e
                last_response = e.response
                last_kind = classify_response(e.response)
            except Exception as e:
                last_exception = e
                last_response = None
                last_kind = classify_exception(e)
            else:
                latency_ms = (time.perf_counter() - start_time) * 1000
                dispatch_event(FetchSucceeded(address=address, latency_ms=latency_ms, status_code=response.status_code))
                return response

            if not last_kind.is_retryable or attempt >= retries:
                attempts.append(RetryAttempt(attempt_index=attempt, kind=last_kind, wait_ms=0))
                break

            wait_ms = compute_wait_ms(last_kind, attempt, last_response)
            attempts.append(RetryAttempt(attempt_index=attempt, kind=last_kind, wait_ms=wait_ms))
            logger.warning(
                f"Retryable error ({last_kind.value}) fetching artwork for {address} "
                f"on attempt {attempt + 1}/{retries + 1}: {_describe(last_exception, last_response)}. "
                f"Waiting {wait_ms / 1000:.2f}s..."
            )
            dispatch_event(RetryScheduled(
                address=address,
                attempt_number=attempt + 1,
                error_kind=last_kind.value,
                delay_seconds=wait_ms / 1000,
            ))
            await self._sleep(wait_ms / 1000)

        raise self._terminal_error(address, last_kind, last_exception, last_response, attempts) from last_exception

    def _terminal_error(
        self,
        address: str,
        kind: ErrorKind,
        exc: Optional[Exception],
        response: Optional[httpx.Response],
        attempts: List[RetryAttempt],
    ) -> FirstMintError:
        cause = _describe(exc, response)
        if response is not None:
            logger.error(f"Zora API error for {address} after {len(attempts)} attempt(s): {cause}. Body: {_body_preview(response)}")
        else:
            logger.error(f"Network error for {address} after {len(attempts)} attempt(s): {cause}")

        error_cls: Type[FirstMintError] = _TERMINAL_ERRORS.get(kind, NonRetryableApiError)
        error = error_cls.for_address(
            address,
            cause,
            attempts=len(attempts),
            status_code=response.status_code if response is not None else None,
            kind=kind,
        )
        error.attempt_log = list(attempts)
        dispatch_event(FetchFailed(
            address=address,
            error_type=type(error).__name__,
            error_message=str(error),
            attempts=error.attempts,
            status_code=error.status_code,
        ))
        return error


def _describe(exc: Optional[Exception], response: Optional[httpx.Response]) -> str:
    if response is not None:
        return f"HTTP {response.status_code} {response.reason_phrase}".rstrip()
    if exc is None:
        return "unknown error"
    return f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__


def _body_preview(response: httpx.Response, limit: int = 500) -> str:
    try:
        text = response.text
    except UnicodeDecodeError:
        return "<undecodable body>"
    return text if len(text) <= limit else text[:limit] + "..."
