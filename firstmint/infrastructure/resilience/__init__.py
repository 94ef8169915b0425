"""API Resilience Implementations.

Contains services for self-throttling outbound requests, classifying
failed attempts and retrying them with error-specific backoff.
Bounded Context: API Resilience
"""
