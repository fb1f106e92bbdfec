"""
Google Maps Platform endpoints used by the service functions.
"""

from ..transport.transport_endpoint import Endpoint, KeyPlacement
from ..transport.transport_rate_limiter import ApiCategory
from ..transport.transport_status import ResponseFormat


LEGACY_BASE_URL = "https://maps.googleapis.com/maps/api"
PLACES_BASE_URL = "https://places.googleapis.com/v1"
ADDRESS_VALIDATION_BASE_URL = "https://addressvalidation.googleapis.com/v1"


GEOCODING = Endpoint(
    title="Geocoding API",
    url=f"{LEGACY_BASE_URL}/geocode/json",
    categories=(ApiCategory.ALL, ApiCategory.GEOCODING),
)

DIRECTIONS = Endpoint(
    title="Directions API",
    url=f"{LEGACY_BASE_URL}/directions/json",
    categories=(ApiCategory.ALL, ApiCategory.DIRECTIONS),
)

DISTANCE_MATRIX = Endpoint(
    title="Distance Matrix API",
    url=f"{LEGACY_BASE_URL}/distancematrix/json",
    categories=(ApiCategory.ALL, ApiCategory.DISTANCE_MATRIX),
)

ELEVATION = Endpoint(
    title="Elevation API",
    url=f"{LEGACY_BASE_URL}/elevation/json",
    categories=(ApiCategory.ALL, ApiCategory.ELEVATION),
)

TIME_ZONE = Endpoint(
    title="Time Zone API",
    url=f"{LEGACY_BASE_URL}/timezone/json",
    categories=(ApiCategory.ALL, ApiCategory.TIME_ZONE),
)

PLACE_DETAILS = Endpoint(
    title="Places API (New) Place Details",
    url=f"{PLACES_BASE_URL}/places/{{place_id}}",
    categories=(ApiCategory.ALL, ApiCategory.PLACES_NEW, ApiCategory.PLACE_DETAILS),
    response_format=ResponseFormat.RESOURCE,
    key_placement=KeyPlacement.HEADER,
)

TEXT_SEARCH = Endpoint(
    title="Places API (New) Text Search",
    url=f"{PLACES_BASE_URL}/places:searchText",
    categories=(ApiCategory.ALL, ApiCategory.PLACES_NEW, ApiCategory.TEXT_SEARCH),
    response_format=ResponseFormat.RESOURCE,
    key_placement=KeyPlacement.HEADER,
)

NEARBY_SEARCH = Endpoint(
    title="Places API (New) Nearby Search",
    url=f"{PLACES_BASE_URL}/places:searchNearby",
    categories=(ApiCategory.ALL, ApiCategory.PLACES_NEW, ApiCategory.NEARBY_SEARCH),
    response_format=ResponseFormat.RESOURCE,
    key_placement=KeyPlacement.HEADER,
)

AUTOCOMPLETE = Endpoint(
    title="Places API (New) Autocomplete",
    url=f"{PLACES_BASE_URL}/places:autocomplete",
    categories=(ApiCategory.ALL, ApiCategory.PLACES_NEW, ApiCategory.AUTOCOMPLETE),
    response_format=ResponseFormat.RESOURCE,
    key_placement=KeyPlacement.HEADER,
)

PLACE_PHOTO = Endpoint(
    title="Places API (New) Place Photo",
    url=f"{PLACES_BASE_URL}/{{photo_name}}/media",
    categories=(ApiCategory.ALL, ApiCategory.PLACES_NEW, ApiCategory.PLACE_PHOTO),
    response_format=ResponseFormat.BINARY,
    key_placement=KeyPlacement.HEADER,
)

VALIDATE_ADDRESS = Endpoint(
    title="Address Validation API",
    url=f"{ADDRESS_VALIDATION_BASE_URL}:validateAddress",
    categories=(ApiCategory.ALL, ApiCategory.ADDRESS_VALIDATION),
    response_format=ResponseFormat.RESOURCE,
)

PROVIDE_VALIDATION_FEEDBACK = Endpoint(
    title="Address Validation API Feedback",
    url=f"{ADDRESS_VALIDATION_BASE_URL}:provideValidationFeedback",
    categories=(ApiCategory.ALL, ApiCategory.ADDRESS_VALIDATION),
    response_format=ResponseFormat.RESOURCE,
)

# Legacy Places API

PLACES_NEARBY_SEARCH = Endpoint(
    title="Places API Nearby Search",
    url=f"{LEGACY_BASE_URL}/place/nearbysearch/json",
    categories=(ApiCategory.ALL, ApiCategory.PLACES),
)

PLACES_TEXT_SEARCH = Endpoint(
    title="Places API Text Search",
    url=f"{LEGACY_BASE_URL}/place/textsearch/json",
    categories=(ApiCategory.ALL, ApiCategory.PLACES),
)

PLACES_DETAILS = Endpoint(
    title="Places API Place Details",
    url=f"{LEGACY_BASE_URL}/place/details/json",
    categories=(ApiCategory.ALL, ApiCategory.PLACES),
)

PLACES_AUTOCOMPLETE = Endpoint(
    title="Places API Place Autocomplete",
    url=f"{LEGACY_BASE_URL}/place/autocomplete/json",
    categories=(ApiCategory.ALL, ApiCategory.PLACES),
)

PLACES_QUERY_AUTOCOMPLETE = Endpoint(
    title="Places API Query Autocomplete",
    url=f"{LEGACY_BASE_URL}/place/queryautocomplete/json",
    categories=(ApiCategory.ALL, ApiCategory.PLACES),
)

# Roads API

ROADS_BASE_URL = "https://roads.googleapis.com/v1"

SNAP_TO_ROADS = Endpoint(
    title="Roads API Snap to Roads",
    url=f"{ROADS_BASE_URL}/snapToRoads",
    categories=(ApiCategory.ALL, ApiCategory.ROADS),
    response_format=ResponseFormat.RESOURCE,
)

NEAREST_ROADS = Endpoint(
    title="Roads API Nearest Roads",
    url=f"{ROADS_BASE_URL}/nearestRoads",
    categories=(ApiCategory.ALL, ApiCategory.ROADS),
    response_format=ResponseFormat.RESOURCE,
)
