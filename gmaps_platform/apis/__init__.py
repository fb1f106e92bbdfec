"""
Google Maps Platform service functions.

This module provides:
- Geocoding and reverse geocoding
- Directions and distance matrices
- Elevation and time zone lookups
- Places API (New): details, text search, nearby search, autocomplete, photos
- Legacy Places API: nearby search, text search, details, autocomplete
- Roads: snap to roads, nearest roads
- Address validation and validation feedback

Every function takes a GoogleMapsClient as its first argument and is
subject to that client's rate limits and retry policy.
"""

from . import apis_endpoints as endpoints
from .apis_places import (
    legacy_autocomplete,
    legacy_nearby_search,
    legacy_place_details,
    legacy_query_autocomplete,
    legacy_text_search,
)
from .apis_roads import nearest_roads, snap_to_roads
from .apis_services import (
    autocomplete,
    directions,
    distance_matrix,
    elevation,
    elevation_along_path,
    field_mask,
    geocode,
    nearby_search,
    place_details,
    place_photo,
    provide_validation_feedback,
    reverse_geocode,
    text_search,
    timezone,
    validate_address,
)

__all__ = [
    "endpoints",

    # Legacy web services
    "geocode",
    "reverse_geocode",
    "directions",
    "distance_matrix",
    "elevation",
    "elevation_along_path",
    "timezone",

    # Places API (New)
    "place_details",
    "text_search",
    "nearby_search",
    "autocomplete",
    "place_photo",
    "field_mask",

    # Legacy Places API
    "legacy_nearby_search",
    "legacy_text_search",
    "legacy_place_details",
    "legacy_autocomplete",
    "legacy_query_autocomplete",

    # Roads
    "snap_to_roads",
    "nearest_roads",

    # Address validation
    "validate_address",
    "provide_validation_feedback",
]
