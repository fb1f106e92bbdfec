"""
Transport layer for the Google Maps Platform client.

This module provides:
- Client-side rate limiting per API category
- Transient/permanent classification of request failures
- Exponential backoff retries
- The HTTP client that combines them

Main classes:
- GoogleMapsClient: API key, rate limits and retry settings
- RateLimitRegistry: Per-client cumulative-average throttling
- BackoffPolicy: Retry bounds

Errors:
- TransportError, ServerError, RateLimitedError: transient
- ClientError, MalformedResponseError, InvalidRequestError: permanent
- ApiStatusError: transient for UNKNOWN_ERROR / UNKNOWN, otherwise permanent
"""

from .transport_classifier import Classification, ClassifiedError, classify_error
from .transport_client import GoogleMapsClient
from .transport_endpoint import Endpoint, KeyPlacement
from .transport_errors import (
    ApiStatusError,
    ClientError,
    ErrorKind,
    GoogleMapsError,
    HttpStatusError,
    InvalidRequestError,
    MalformedResponseError,
    RateLimitedError,
    ServerError,
    TransportError,
)
from .transport_rate_limiter import ApiCategory, ApiLimit, RateLimitRegistry, compute_sleep_seconds
from .transport_retry import BackoffPolicy, execute_with_retry
from .transport_status import ResponseFormat

__all__ = [
    # Main classes
    "GoogleMapsClient",
    "RateLimitRegistry",
    "ApiLimit",
    "ApiCategory",
    "BackoffPolicy",
    "Endpoint",
    "KeyPlacement",
    "ResponseFormat",
    "ClassifiedError",
    "Classification",

    # Functions
    "execute_with_retry",
    "classify_error",
    "compute_sleep_seconds",

    # Errors
    "ErrorKind",
    "GoogleMapsError",
    "TransportError",
    "HttpStatusError",
    "ServerError",
    "RateLimitedError",
    "ClientError",
    "MalformedResponseError",
    "ApiStatusError",
    "InvalidRequestError",
]
