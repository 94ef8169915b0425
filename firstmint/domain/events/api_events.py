"""Domain Events related to fetch calls and resilience.

Examples include events for when calls are deferred, retried, fail, or succeed.
"""

import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class DomainEvent:
    """Base class for domain events."""
    pass


@dataclass
class FetchInitiated(DomainEvent):
    """Event triggered when an attempt is about to hit the API."""
    address: str
    attempt_number: int
    timestamp: float = field(default_factory=time.time)


@dataclass
class FetchDeferred(DomainEvent):
    """Event triggered when an attempt is held back by the local rate limiter."""
    address: str
    wait_time_seconds: float
    timestamp: float = field(default_factory=time.time)


@dataclass
class RetryScheduled(DomainEvent):
    """Event triggered when a retry is scheduled for a failed attempt."""
    address: str
    attempt_number: int
    error_kind: str
    delay_seconds: float
    timestamp: float = field(default_factory=time.time)


@dataclass
class FetchSucceeded(DomainEvent):
    """Event triggered when the API answers with a 2xx response."""
    address: str
    latency_ms: float
    status_code: int
    timestamp: float = field(default_factory=time.time)


@dataclass
class FetchFailed(DomainEvent):
    """Event triggered when a fetch fails definitively (after retries)."""
    address: str
    error_type: str
    error_message: str
    attempts: int
    status_code: Optional[int] = None
    timestamp: float = field(default_factory=time.time)
