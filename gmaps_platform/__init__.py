"""
Rate-limited, retrying client for the Google Maps Platform web services.

Main classes:
- GoogleMapsClient: API key, per-category rate limits and retry policy
- ApiCategory: Rate limit buckets ("All", "Geocoding", "Places (New)", ...)
- BackoffPolicy: Exponential backoff bounds
"""

from .transport import (
    ApiCategory,
    ApiStatusError,
    BackoffPolicy,
    ClientError,
    GoogleMapsClient,
    GoogleMapsError,
    InvalidRequestError,
    MalformedResponseError,
    RateLimitedError,
    ServerError,
    TransportError,
)

__all__ = [
    "GoogleMapsClient",
    "ApiCategory",
    "BackoffPolicy",
    "GoogleMapsError",
    "TransportError",
    "ServerError",
    "RateLimitedError",
    "ClientError",
    "MalformedResponseError",
    "ApiStatusError",
    "InvalidRequestError",
]

# Version info
__version__ = "1.0.0"
