"""
Client-side request throttling per Google Maps Platform API.

Each configured API category keeps a cumulative request count since its
first call. When the average rate since that first call exceeds the
configured budget, the calling thread sleeps before the request is sent.
There is no window rollover: the average covers the life of the client.
"""

import math
import threading
import time
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Dict, Iterable, Optional, Union

from ..config.logger_module import log_debug, log_info
from .transport_formatting import duration_to_string, rate_to_string


class ApiCategory(Enum):
    """Rate-limit categories. ALL is observed in addition to the specific one."""

    ALL = "All"
    ADDRESS_VALIDATION = "Address Validation"
    AUTOCOMPLETE = "Autocomplete"
    DIRECTIONS = "Directions"
    DISTANCE_MATRIX = "Distance Matrix"
    ELEVATION = "Elevation"
    GEOCODING = "Geocoding"
    NEARBY_SEARCH = "Nearby Search"
    PLACE_DETAILS = "Place Details"
    PLACE_PHOTO = "Place Photo"
    PLACES = "Places"
    PLACES_NEW = "Places (New)"
    ROADS = "Roads"
    TEXT_SEARCH = "Text Search"
    TIME_ZONE = "Time Zone"


def compute_sleep_seconds(current_rate: float, target_rate: float) -> int:
    """
    Whole seconds to sleep when the observed rate is above the target.

    The delay is one target interval plus the overrun, rounded half up.
    Returns 0 when the observed rate is at or below the target.
    """
    difference = current_rate - target_rate
    if difference <= 0:
        return 0
    return int(math.floor((1.0 / target_rate) + difference + 0.5))


def _to_seconds(per_duration: Union[float, int, timedelta]) -> float:
    if isinstance(per_duration, timedelta):
        return per_duration.total_seconds()
    return float(per_duration)


@dataclass
class ApiLimit:
    """Budget and cumulative request state for one API category."""

    requests_limit: int
    per_duration: float
    first_request: Optional[float] = None
    total_request_count: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def target_rate(self) -> float:
        """Budgeted requests per second."""
        return self.requests_limit / self.per_duration

    def current_rate(self, now: float) -> Optional[float]:
        """Observed requests per second since the first request, if defined."""
        if self.first_request is None:
            return None
        elapsed = now - self.first_request
        if elapsed <= 0:
            return None
        return self.total_request_count / elapsed


class RateLimitRegistry:
    """
    Per-client collection of API limits.

    Categories without a configured limit are unlimited. Each ApiLimit has
    its own lock, held for the whole read-sleep-increment sequence, so
    concurrent callers in one category take turns and no request goes
    uncounted.
    """

    def __init__(self):
        self._limits: Dict[ApiCategory, ApiLimit] = {}
        self._registry_lock = threading.Lock()

    def with_rate(self,
                  category: ApiCategory,
                  requests: int,
                  per_duration: Union[float, int, timedelta]) -> "RateLimitRegistry":
        """
        Set the request budget for an API category.

        Reconfiguring a category keeps its first-request timestamp and
        request count.

        Args:
            category: API category to limit
            requests: Number of requests allowed per duration
            per_duration: Duration in seconds, or a timedelta

        Returns:
            The registry, for chaining

        Raises:
            ValueError: If the budget is not positive
        """
        seconds = _to_seconds(per_duration)
        if requests <= 0:
            raise ValueError(f"requests must be positive, got {requests}")
        if seconds <= 0:
            raise ValueError(f"per_duration must be positive, got {seconds}")

        with self._registry_lock:
            existing = self._limits.get(category)
            if existing is None:
                self._limits[category] = ApiLimit(requests_limit=requests, per_duration=seconds)
            else:
                with existing._lock:
                    existing.requests_limit = requests
                    existing.per_duration = seconds

        log_info(
            f"Rate limit for the `{category.value}` API set to "
            f"{rate_to_string(requests, seconds)}"
        )
        return self

    def get(self, category: ApiCategory) -> Optional[ApiLimit]:
        return self._limits.get(category)

    def limit(self, category: ApiCategory) -> int:
        """
        Observe the rate limit for one category, sleeping if it is exceeded.

        Args:
            category: API category of the outgoing request

        Returns:
            Seconds slept (0 when no throttling was needed)
        """
        api_limit = self._limits.get(category)
        if api_limit is None:
            return 0

        with api_limit._lock:
            now = time.monotonic()

            if api_limit.first_request is None:
                log_debug(f"Rate limiting is enabled for the `{category.value}` API")
                api_limit.first_request = now
                api_limit.total_request_count = 1
                return 0

            elapsed = now - api_limit.first_request
            current_rate = api_limit.current_rate(now)
            target_rate = api_limit.target_rate
            sleep_seconds = 0

            if current_rate is not None:
                log_debug(
                    f"{api_limit.total_request_count} requests to the `{category.value}` API "
                    f"this session, which began {duration_to_string(elapsed)} ago. "
                    f"Current rate: {rate_to_string(api_limit.total_request_count, elapsed)}. "
                    f"Target rate: {rate_to_string(api_limit.requests_limit, api_limit.per_duration)}."
                )
                sleep_seconds = compute_sleep_seconds(current_rate, target_rate)

            if sleep_seconds > 0:
                log_info(f"Sleeping for {duration_to_string(sleep_seconds)} to observe the `{category.value}` rate limit")
                time.sleep(sleep_seconds)

            api_limit.total_request_count += 1
            return sleep_seconds

    def limit_apis(self, categories: Iterable[ApiCategory]) -> int:
        """
        Observe the rate limits for a request, checking ALL first.

        Each category may sleep in turn, so the total wait is the sum of
        the individual waits.

        Returns:
            Total seconds slept
        """
        ordered = [ApiCategory.ALL]
        for category in categories:
            if category not in ordered:
                ordered.append(category)

        return sum(self.limit(category) for category in ordered)
