"""
Google Maps Platform HTTP client with rate limiting and retries.

Every request goes through the same steps: observe the client-side rate
limits for the endpoint's API categories, then run one HTTP attempt under
the retry driver until it succeeds or fails permanently.
"""

import dataclasses
from datetime import timedelta
from typing import Any, Dict, Optional, Union

import requests

from ..config.config_module import API_KEY_ENV_VAR, get_config
from ..config.logger_module import log_debug, log_error, log_info
from .transport_endpoint import Endpoint, KeyPlacement
from .transport_errors import InvalidRequestError, TransportError, http_status_error
from .transport_rate_limiter import ApiCategory, RateLimitRegistry
from .transport_retry import BackoffPolicy, execute_with_retry
from .transport_status import error_message_from_body, interpret_body


TRANSIENT_REQUEST_EXCEPTIONS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
    requests.exceptions.ChunkedEncodingError,
)


class GoogleMapsClient:
    """
    Holds the API key, rate limits and retry settings for Google Maps calls.

    Settings can be chained:

        client = (GoogleMapsClient(api_key="...")
                  .with_rate(ApiCategory.ALL, 50, 1.0)
                  .with_rate(ApiCategory.GEOCODING, 10, 1.0)
                  .with_max_retries(5))
    """

    USER_AGENT = "gmaps-platform/1.0"
    API_KEY_HEADER = "X-Goog-Api-Key"

    def __init__(self,
                 api_key: Optional[str] = None,
                 backoff_policy: Optional[BackoffPolicy] = None,
                 request_timeout: float = 30,
                 session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            api_key: Google Maps API key (loaded from config if not provided)
            backoff_policy: Retry bounds (defaults to BackoffPolicy())
            request_timeout: HTTP timeout in seconds for each attempt
            session: Pre-configured requests session to use
        """
        self.api_key = api_key or get_config(API_KEY_ENV_VAR)
        if not self.api_key:
            raise ValueError(f"{API_KEY_ENV_VAR} not provided or found in config")

        self.request_timeout = request_timeout
        self.backoff_policy = backoff_policy or BackoffPolicy()
        self.rate_limit = RateLimitRegistry()

        self._session = session or requests.Session()
        self._session.headers.update({'User-Agent': self.USER_AGENT})

        log_info(
            f"GoogleMapsClient initialized (timeout={request_timeout}s, "
            f"max_attempts={self.backoff_policy.max_attempts})"
        )

    def with_rate(self,
                  category: ApiCategory,
                  requests_per_duration: int,
                  per_duration: Union[float, int, timedelta]) -> "GoogleMapsClient":
        """Limit an API category to a number of requests per duration."""
        self.rate_limit.with_rate(category, requests_per_duration, per_duration)
        return self

    def with_max_retries(self, max_retries: int) -> "GoogleMapsClient":
        """Allow up to max_retries retries after the first attempt."""
        self.backoff_policy = dataclasses.replace(self.backoff_policy, max_attempts=max_retries + 1)
        return self

    def with_max_delay(self, max_delay: Union[float, timedelta]) -> "GoogleMapsClient":
        """Cap the delay between consecutive retries."""
        if isinstance(max_delay, timedelta):
            max_delay = max_delay.total_seconds()
        self.backoff_policy = dataclasses.replace(self.backoff_policy, max_delay=float(max_delay))
        return self

    def with_backoff_policy(self, policy: BackoffPolicy) -> "GoogleMapsClient":
        self.backoff_policy = policy
        return self

    def get_request(self,
                    endpoint: Endpoint,
                    params: Optional[Dict[str, Any]] = None,
                    headers: Optional[Dict[str, str]] = None,
                    path_params: Optional[Dict[str, str]] = None) -> Any:
        """
        Perform an HTTP GET against an endpoint.

        Raises:
            GoogleMapsError: Any failure, after retries where applicable
        """
        return self._request("GET", endpoint, params, None, headers, path_params)

    def post_request(self,
                     endpoint: Endpoint,
                     body: Dict[str, Any],
                     params: Optional[Dict[str, Any]] = None,
                     headers: Optional[Dict[str, str]] = None,
                     path_params: Optional[Dict[str, str]] = None) -> Any:
        """
        Perform an HTTP POST with a JSON body against an endpoint.

        Raises:
            GoogleMapsError: Any failure, after retries where applicable
        """
        return self._request("POST", endpoint, params, body, headers, path_params)

    def close(self) -> None:
        self._session.close()

    def _request(self,
                 method: str,
                 endpoint: Endpoint,
                 params: Optional[Dict[str, Any]],
                 body: Optional[Dict[str, Any]],
                 headers: Optional[Dict[str, str]],
                 path_params: Optional[Dict[str, str]]) -> Any:
        try:
            url = endpoint.resolve_url(**(path_params or {}))
        except KeyError as e:
            raise InvalidRequestError(f"Missing path parameter {e} for {endpoint.title}") from e

        query = dict(params or {})
        request_headers = dict(headers or {})
        if endpoint.key_placement is KeyPlacement.HEADER:
            request_headers[self.API_KEY_HEADER] = self.api_key
        else:
            query["key"] = self.api_key

        # Bare URL only, the query may carry the key.
        log_info(f"{method} request to {endpoint.title}: {url}")

        self.rate_limit.limit_apis(endpoint.categories)

        def attempt() -> Any:
            return self._attempt(method, url, endpoint, query, body, request_headers)

        return execute_with_retry(
            attempt,
            policy=self.backoff_policy,
            description=f"{method} {endpoint.title}",
        )

    def _attempt(self,
                 method: str,
                 url: str,
                 endpoint: Endpoint,
                 query: Dict[str, Any],
                 body: Optional[Dict[str, Any]],
                 headers: Dict[str, str]) -> Any:
        try:
            response = self._session.request(
                method,
                url,
                params=query,
                json=body,
                headers=headers,
                timeout=self.request_timeout,
            )
        except TRANSIENT_REQUEST_EXCEPTIONS as e:
            log_error(f"HTTP request error for {endpoint.title}: {type(e).__name__}")
            raise TransportError(f"{type(e).__name__} while calling {endpoint.title}", url=url) from e
        except requests.exceptions.RequestException as e:
            log_error(f"Could not send request to {endpoint.title}: {type(e).__name__}")
            raise InvalidRequestError(f"Could not send request to {endpoint.title}: {type(e).__name__}") from e

        if not 200 <= response.status_code < 300:
            message = error_message_from_body(response.content)
            log_error(
                f"{endpoint.title} returned HTTP {response.status_code} "
                f"{response.reason or ''}".rstrip()
            )
            raise http_status_error(response.status_code, response.reason or "", message)

        log_debug(f"{endpoint.title} returned HTTP {response.status_code} ({len(response.content)} bytes)")
        return interpret_body(endpoint.response_format, response.content)
