"""
Description of a Google Maps Platform REST endpoint.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .transport_rate_limiter import ApiCategory
from .transport_status import ResponseFormat


class KeyPlacement(Enum):
    QUERY = "query"
    HEADER = "header"


@dataclass(frozen=True)
class Endpoint:
    """
    Where a request goes and how its response is read.

    url may contain {placeholders} filled from path parameters, e.g.
    "https://places.googleapis.com/v1/places/{place_id}".
    """

    title: str
    url: str
    categories: Tuple[ApiCategory, ...]
    response_format: ResponseFormat = ResponseFormat.STATUS_ENVELOPE
    key_placement: KeyPlacement = KeyPlacement.QUERY

    def resolve_url(self, **path_params: str) -> str:
        return self.url.format(**path_params)
