import pytest
from typer.testing import CliRunner
from typing import Any, Dict, List, Optional

import httpx

from firstmint.infrastructure.config.settings import clear_test_config
from firstmint.infrastructure.resilience.api_retry import ApiRetryService
from firstmint.infrastructure.resilience.rate_limiter import WindowRateLimiter
from firstmint.infrastructure.zora.graphql_request import ZORA_GRAPHQL_ENDPOINT


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Async sleep stand-in: records every wait and moves the fake clock forward."""

    def __init__(self, clock: Optional[FakeClock] = None):
        self.clock = clock
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        if self.clock is not None:
            self.clock.advance(seconds)


def make_response(
    status_code: int,
    json: Any = None,
    headers: Optional[Dict[str, str]] = None,
    text: Optional[str] = None,
) -> httpx.Response:
    """Builds a response tied to a request, as httpx.AsyncClient would return it."""
    request = httpx.Request("POST", ZORA_GRAPHQL_ENDPOINT)
    if text is not None:
        return httpx.Response(status_code, text=text, headers=headers, request=request)
    return httpx.Response(status_code, json=json, headers=headers, request=request)


def artwork_payload(uri: str = "ipfs://abc") -> Dict[str, Any]:
    return {
        "data": {
            "profile": {
                "collectedCollectionsOrTokens": {
                    "edges": [
                        {"node": {"media": {"previewImage": {"previewImage": {"downloadableUri": uri}}}}},
                        {"node": {"media": {"previewImage": {"previewImage": {"downloadableUri": "ipfs://second"}}}}},
                    ]
                }
            }
        }
    }


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleeper(clock: FakeClock) -> RecordingSleep:
    return RecordingSleep(clock)


@pytest.fixture
def rate_limiter(clock: FakeClock, sleeper: RecordingSleep) -> WindowRateLimiter:
    return WindowRateLimiter(max_requests=30, window_seconds=60, clock=clock, sleep=sleeper)


@pytest.fixture
def retry_service(rate_limiter: WindowRateLimiter, sleeper: RecordingSleep) -> ApiRetryService:
    return ApiRetryService(rate_limiter=rate_limiter, max_retries=3, sleep=sleeper)


@pytest.fixture(autouse=True)
def reset_test_config():
    """Keeps configuration overrides from leaking between tests."""
    yield
    clear_test_config()


@pytest.fixture
def response_factory():
    """Factory for httpx responses bound to a POST to the Zora endpoint."""
    return make_response


@pytest.fixture
def payload_factory():
    """Factory for well-formed ProfileAndMints envelopes."""
    return artwork_payload
