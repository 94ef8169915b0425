import pytest
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

import httpx

from firstmint.domain.models.common import ErrorKind
from firstmint.infrastructure.resilience.error_classifier import (
    classify_exception,
    classify_response,
    compute_wait_ms,
    exponential_backoff_ms,
    parse_retry_hint_ms,
)


@pytest.mark.parametrize(
    "status, expected",
    [
        (429, ErrorKind.RATE_LIMITED),
        (403, ErrorKind.FORBIDDEN),
        (500, ErrorKind.SERVER_ERROR),
        (503, ErrorKind.SERVER_ERROR),
        (400, ErrorKind.NON_RETRYABLE),
        (404, ErrorKind.NON_RETRYABLE),
        (301, ErrorKind.NON_RETRYABLE),
    ]
)
def test_classify_response(response_factory, status, expected):
    assert classify_response(response_factory(status, json={})) is expected


def test_classify_exception():
    request = httpx.Request("POST", "https://example.test")
    assert classify_exception(httpx.ReadTimeout("slow", request=request)) is ErrorKind.TIMEOUT
    assert classify_exception(httpx.ConnectTimeout("slow", request=request)) is ErrorKind.TIMEOUT
    assert classify_exception(httpx.ConnectError("refused", request=request)) is ErrorKind.NETWORK_ERROR
    assert classify_exception(httpx.RemoteProtocolError("eof", request=request)) is ErrorKind.NETWORK_ERROR
    assert classify_exception(httpx.UnsupportedProtocol("no scheme", request=request)) is ErrorKind.NON_RETRYABLE
    assert classify_exception(httpx.LocalProtocolError("bad header", request=request)) is ErrorKind.NON_RETRYABLE
    assert classify_exception(ValueError("boom")) is ErrorKind.NON_RETRYABLE


def test_retryable_kinds():
    assert ErrorKind.RATE_LIMITED.is_retryable
    assert ErrorKind.TIMEOUT.is_retryable
    assert not ErrorKind.NON_RETRYABLE.is_retryable
    assert not ErrorKind.INVALID_INPUT.is_retryable


def test_exponential_backoff():
    assert [exponential_backoff_ms(a) for a in range(4)] == [1000, 2000, 4000, 8000]
    assert exponential_backoff_ms(2, 2000) == 8000


def test_detail_hint_takes_precedence_over_retry_after(response_factory):
    response = response_factory(
        429,
        json={"detail": "Request was throttled. Please try again after 2.5 seconds."},
        headers={"Retry-After": "30"},
    )
    assert parse_retry_hint_ms(response) == 2500
    assert compute_wait_ms(ErrorKind.RATE_LIMITED, 0, response) == 2500


def test_retry_after_header_only(response_factory):
    response = response_factory(429, json={"message": "slow down"}, headers={"Retry-After": "5"})
    assert parse_retry_hint_ms(response) == 5000


def test_retry_after_http_date(response_factory):
    retry_at = datetime.now(timezone.utc) + timedelta(seconds=120)
    response = response_factory(429, text="", headers={"Retry-After": format_datetime(retry_at, usegmt=True)})
    hint = parse_retry_hint_ms(response)
    assert hint is not None
    assert 100_000 < hint <= 120_000


def test_detail_without_pattern_falls_back_to_header(response_factory):
    response = response_factory(429, json={"detail": "Too many requests"}, headers={"Retry-After": "1"})
    assert parse_retry_hint_ms(response) == 1000


def test_no_hint_uses_exponential_backoff(response_factory):
    response = response_factory(429, text="<html>rate limited</html>", headers={"Retry-After": "soon"})
    assert parse_retry_hint_ms(response) is None
    assert compute_wait_ms(ErrorKind.RATE_LIMITED, 2, response) == 4000


@pytest.mark.parametrize(
    "kind, attempt, expected",
    [
        (ErrorKind.FORBIDDEN, 0, 2000),
        (ErrorKind.FORBIDDEN, 3, 16000),
        (ErrorKind.SERVER_ERROR, 1, 2000),
        (ErrorKind.NETWORK_ERROR, 2, 4000),
        (ErrorKind.TIMEOUT, 0, 1000),
        (ErrorKind.NON_RETRYABLE, 2, 0),
    ]
)
def test_compute_wait_ms(kind, attempt, expected):
    assert compute_wait_ms(kind, attempt) == expected


@pytest.mark.parametrize(
    "body, headers",
    [
        ({}, {"Retry-After": "nan"}),
        ({}, {"Retry-After": "inf"}),
        ({}, {"Retry-After": "Infinity"}),
        ({}, {"Retry-After": "1e400"}),
        ({}, {"Retry-After": "86400"}),
        ({"detail": f"Please try again after {'9' * 400} seconds."}, {}),
        ({"detail": "Please try again after 1000000 seconds."}, {}),
    ]
)
def test_unusable_hint_falls_back_to_exponential_backoff(response_factory, body, headers):
    response = response_factory(429, json=body, headers=headers)
    assert parse_retry_hint_ms(response) is None
    assert compute_wait_ms(ErrorKind.RATE_LIMITED, 2, response) == 4000


def test_out_of_range_detail_falls_back_to_retry_after(response_factory):
    response = response_factory(
        429,
        json={"detail": f"try again after {'9' * 400} seconds"},
        headers={"Retry-After": "3"},
    )
    assert parse_retry_hint_ms(response) == 3000
