"""
Retry driver with exponential backoff.

Runs one request attempt at a time, retrying only the failures the
classifier marks as transient. The driver knows nothing about Google Maps
error types; it works with any callable and any classifier.
"""

import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
)

from ..config.logger_module import log_error, log_warning
from .transport_classifier import ClassifiedError, classify_error

T = TypeVar("T")


@dataclass(frozen=True)
class BackoffPolicy:
    """
    Bounds for exponential backoff.

    The delay after the n-th failed attempt is
    initial_delay * multiplier ** (n - 1), capped at max_delay. The loop
    ends at max_attempts attempts or once max_elapsed seconds have passed,
    whichever comes first.
    """

    initial_delay: float = 1.0
    multiplier: float = 2.0
    max_delay: float = 60.0
    max_attempts: int = 4
    max_elapsed: Optional[float] = None

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("Backoff delays must not be negative")
        if self.multiplier < 1:
            raise ValueError(f"multiplier must be at least 1, got {self.multiplier}")
        if self.max_elapsed is not None and self.max_elapsed <= 0:
            raise ValueError(f"max_elapsed must be positive, got {self.max_elapsed}")

    def delay_for(self, attempt_number: int) -> float:
        """Delay scheduled after the given (1-based) failed attempt."""
        return min(self.initial_delay * self.multiplier ** (attempt_number - 1), self.max_delay)

    def stop_condition(self):
        stop = stop_after_attempt(self.max_attempts)
        if self.max_elapsed is not None:
            stop = stop | stop_after_delay(self.max_elapsed)
        return stop

    def wait_strategy(self):
        return wait_exponential(
            multiplier=self.initial_delay,
            exp_base=self.multiplier,
            max=self.max_delay,
        )


def _log_retry(description: str, classify: Callable[[BaseException], ClassifiedError]):
    def before_sleep(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception()
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        log_warning(
            f"{description}: attempt {retry_state.attempt_number} failed with "
            f"{classify(error)}; retrying in {delay:.2f}s "
            f"({retry_state.seconds_since_start:.2f}s elapsed)"
        )
    return before_sleep


def execute_with_retry(attempt_fn: Callable[[], T],
                       policy: Optional[BackoffPolicy] = None,
                       classify: Callable[[BaseException], ClassifiedError] = classify_error,
                       sleep: Callable[[float], None] = time.sleep,
                       description: str = "request") -> T:
    """
    Call attempt_fn until it succeeds, fails permanently, or backoff runs out.

    Args:
        attempt_fn: Idempotent callable performing exactly one round trip
        policy: Backoff bounds (defaults to BackoffPolicy())
        classify: Maps a raised exception to a ClassifiedError
        sleep: Called with each backoff delay in seconds
        description: Label used in log lines

    Returns:
        The value returned by the first successful attempt

    Raises:
        The exception from the last attempt, unchanged
    """
    policy = policy or BackoffPolicy()

    retrying = Retrying(
        stop=policy.stop_condition(),
        wait=policy.wait_strategy(),
        retry=retry_if_exception(lambda error: classify(error).is_transient),
        before_sleep=_log_retry(description, classify),
        sleep=sleep,
        reraise=True,
    )

    try:
        return retrying(attempt_fn)
    except Exception as error:
        log_error(f"{description} failed: {classify(error)}")
        raise
