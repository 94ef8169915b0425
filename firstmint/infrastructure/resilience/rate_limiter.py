"""Implementation of a rate limiter.

Controls the frequency of outgoing requests to stay under the upstream
provider's own rate limiting. Uses a fixed window that restarts once it
has fully elapsed: at most `max_requests` permits per `window_seconds`.
"""

import asyncio
import logging
import threading
import time
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)

DEFAULT_MAX_REQUESTS = 30       # 30 requests...
DEFAULT_WINDOW_SECONDS = 60     # ...per minute
# The window only rolls once strictly more than its length has elapsed.
WAIT_BUFFER_SECONDS = 0.01


class WindowRateLimiter:
    """Process-wide request gate shared by every fetch call."""

    def __init__(
        self,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initializes the rate limiter.

        Args:
            max_requests: Maximum number of requests allowed in one window.
            window_seconds: The window length in seconds.
            clock: Monotonic time source in seconds.
            sleep: Coroutine function used to suspend while the window drains.
        """
        if max_requests <= 0 or window_seconds <= 0:
            raise ValueError("Max requests and window must be positive.")

        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._request_count = 0
        self._window_start = clock()
        logger.info(f"RateLimiter initialized: {max_requests} requests / {window_seconds} seconds")

    @property
    def request_count(self) -> int:
        return self._request_count

    @property
    def window_start(self) -> float:
        return self._window_start

    def reset(self) -> None:
        """Starts a fresh window with no requests counted."""
        with self._lock:
            self._request_count = 0
            self._window_start = self._clock()

    def _roll_window(self, now: float) -> None:
        # Caller holds the lock.
        if now - self._window_start > self.window_seconds:
            self._request_count = 0
            self._window_start = now

    def try_acquire(self) -> bool:
        """Takes one permit from the current window.

        Returns:
            True if the request may go out now, False if the quota for the
            current window is exhausted. A refusal does not change state.
        """
        with self._lock:
            self._roll_window(self._clock())
            if self._request_count >= self.max_requests:
                return False
            self._request_count += 1
            return True

    def time_until_reset(self) -> float:
        """Seconds left before the current window elapses (never negative)."""
        with self._lock:
            elapsed = self._clock() - self._window_start
            return max(0.0, self.window_seconds - elapsed)

    async def wait_for_permission(self) -> float:
        """Waits until a request is permitted according to the rate limit.

        The window is re-checked once after sleeping; by then it has elapsed,
        so no further loop is needed.

        Returns:
            Seconds spent waiting (0.0 when a permit was free).
        """
        if self.try_acquire():
            logger.debug("Rate limit permission granted.")
            return 0.0

        wait_time = self.time_until_reset() + WAIT_BUFFER_SECONDS
        logger.warning(
            f"Local rate limit of {self.max_requests} requests / {self.window_seconds}s reached. "
            f"Waiting {wait_time:.2f} seconds."
        )
        await self._sleep(wait_time)

        if not self.try_acquire():
            # Only reachable when concurrent callers drained the new window first.
            logger.warning("Rate limit still exhausted after waiting; proceeding without a permit.")
        return wait_time
