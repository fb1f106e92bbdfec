"""
Human-readable renderings of durations and request rates for log lines.
"""

from typing import List, Tuple


# (upper bound in seconds, unit length in seconds, singular, plural)
_UNITS: List[Tuple[float, float, str, str]] = [
    (1.0, 0.001, "millisecond", "milliseconds"),
    (60.0, 1.0, "second", "seconds"),
    (3_600.0, 60.0, "minute", "minutes"),
    (86_400.0, 3_600.0, "hour", "hours"),
    (604_800.0, 86_400.0, "day", "days"),
    (2_629_746.0, 604_800.0, "week", "weeks"),
    (31_556_952.0, 2_629_746.0, "month", "months"),
    (float("inf"), 31_556_952.0, "year", "years"),
]


def _select_unit(seconds: float) -> Tuple[float, str, str]:
    for upper_bound, unit_seconds, singular, plural in _UNITS:
        if seconds < upper_bound:
            return unit_seconds, singular, plural
    raise ValueError(f"Cannot select a unit for {seconds} seconds")


def format_quantity(quantity: float) -> str:
    """Format a number with more decimals for small values, none for large ones."""
    if quantity < 0.001:
        text = f"{quantity:.6f}"
    elif quantity < 0.01:
        text = f"{quantity:.5f}"
    elif quantity < 0.1:
        text = f"{quantity:.4f}"
    elif quantity < 1.0:
        text = f"{quantity:.3f}"
    elif quantity < 10.0:
        text = f"{quantity:.2f}"
    elif quantity < 100.0:
        text = f"{quantity:.1f}"
    else:
        text = f"{quantity:.0f}"

    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def duration_to_string(seconds: float) -> str:
    """
    Render a duration in the largest unit that keeps the quantity readable.

    >>> duration_to_string(90)
    '1.5 minutes'
    """
    unit_seconds, singular, plural = _select_unit(seconds)
    quantity = format_quantity(seconds / unit_seconds)
    return f"{quantity} {singular if quantity == '1' else plural}"


def rate_to_string(requests: int, seconds: float) -> str:
    """
    Render a request rate, picking the time unit from the observed duration.

    >>> rate_to_string(30, 60)
    '30 requests per minute'
    """
    if seconds <= 0:
        return f"{requests} {'request' if requests == 1 else 'requests'} per 0 seconds"
    unit_seconds, singular, _ = _select_unit(seconds)
    quantity = format_quantity(requests / seconds * unit_seconds)
    noun = "request" if quantity == "1" else "requests"
    return f"{quantity} {noun} per {singular}"
