"""
Service functions for the Google Maps Platform APIs.

Each function takes a GoogleMapsClient as its first argument, checks the
arguments that Google would reject anyway, formats the request and returns
the decoded response. Responses are returned as plain JSON data (or bytes
for photos); their contents are not modeled.
"""

import time
from typing import Any, Dict, Iterable, List, Optional, Sequence

from googlemaps import convert

from ..transport.transport_client import GoogleMapsClient
from ..transport.transport_errors import InvalidRequestError
from . import apis_endpoints as endpoints


TRAVEL_MODES = {"driving", "walking", "bicycling", "transit"}
AVOID_FEATURES = {"tolls", "highways", "ferries", "indoor"}
UNIT_SYSTEMS = {"metric", "imperial"}
TRAFFIC_MODELS = {"best_guess", "optimistic", "pessimistic"}
TRANSIT_MODES = {"bus", "subway", "train", "tram", "rail"}

MAX_MATRIX_LOCATIONS = 25
MAX_MATRIX_ELEMENTS = 100
MAX_ELEVATION_SAMPLES = 512
MAX_NEARBY_RADIUS_METERS = 50_000.0
MAX_PHOTO_PX = 4800
MAX_ADDRESS_CHARS = 280

FIELD_MASK_HEADER = "X-Goog-FieldMask"


def field_mask(fields: Optional[Iterable[str]]) -> str:
    """Join response field names into an X-Goog-FieldMask value ("*" for all)."""
    if fields is None:
        return "*"
    names = convert.as_list(fields) if isinstance(fields, str) else list(fields)
    if not names:
        raise InvalidRequestError("At least one field is required in a field mask")
    return ",".join(names)


def _check_choice(name: str, value: Optional[str], choices: set) -> None:
    if value is not None and value not in choices:
        raise InvalidRequestError(f"Invalid {name} '{value}', expected one of: {', '.join(sorted(choices))}")


def _circle(location: Any, radius: float) -> Dict[str, Any]:
    lat, lng = convert.normalize_lat_lng(location)
    return {
        "circle": {
            "center": {"latitude": lat, "longitude": lng},
            "radius": radius,
        }
    }


def _compact(body: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in body.items() if value is not None}


# ==================== LEGACY WEB SERVICES ====================

def geocode(client: GoogleMapsClient,
            address: Optional[str] = None,
            components: Optional[Dict[str, Any]] = None,
            bounds: Optional[Any] = None,
            region: Optional[str] = None,
            language: Optional[str] = None,
            place_id: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Geocode an address, a set of component filters, or a place ID.

    Returns:
        The "results" list of the Geocoding API response

    Raises:
        InvalidRequestError: If none of address, components or place_id is given
    """
    if not address and not components and not place_id:
        raise InvalidRequestError(
            "Forward geocoding requires an address, a component filter or a place ID"
        )

    params: Dict[str, Any] = {}
    if address:
        params["address"] = address
    if components:
        params["components"] = convert.components(components)
    if bounds:
        params["bounds"] = convert.bounds(bounds)
    if region:
        params["region"] = region
    if language:
        params["language"] = language
    if place_id:
        params["place_id"] = place_id

    return client.get_request(endpoints.GEOCODING, params)["results"]


def reverse_geocode(client: GoogleMapsClient,
                    latlng: Any,
                    result_type: Optional[Sequence[str]] = None,
                    location_type: Optional[Sequence[str]] = None,
                    language: Optional[str] = None) -> List[Dict[str, Any]]:
    """Look up the addresses of a coordinate."""
    params: Dict[str, Any] = {"latlng": convert.latlng(latlng)}
    if result_type:
        params["result_type"] = convert.join_list("|", result_type)
    if location_type:
        params["location_type"] = convert.join_list("|", location_type)
    if language:
        params["language"] = language

    return client.get_request(endpoints.GEOCODING, params)["results"]


def directions(client: GoogleMapsClient,
               origin: Any,
               destination: Any,
               mode: Optional[str] = None,
               waypoints: Optional[Sequence[Any]] = None,
               optimize_waypoints: bool = False,
               alternatives: bool = False,
               avoid: Optional[Sequence[str]] = None,
               language: Optional[str] = None,
               units: Optional[str] = None,
               region: Optional[str] = None,
               departure_time: Optional[Any] = None,
               arrival_time: Optional[Any] = None,
               traffic_model: Optional[str] = None,
               transit_mode: Optional[Sequence[str]] = None) -> List[Dict[str, Any]]:
    """
    Get routes between an origin and a destination.

    Returns:
        The "routes" list of the Directions API response

    Raises:
        InvalidRequestError: On conflicting or unsupported arguments
    """
    _check_choice("mode", mode, TRAVEL_MODES)
    _check_choice("units", units, UNIT_SYSTEMS)
    _check_choice("traffic_model", traffic_model, TRAFFIC_MODELS)
    for feature in convert.as_list(avoid or []):
        _check_choice("avoid", feature, AVOID_FEATURES)
    for vehicle in convert.as_list(transit_mode or []):
        _check_choice("transit_mode", vehicle, TRANSIT_MODES)

    if waypoints and alternatives:
        raise InvalidRequestError("Alternative routes cannot be requested when waypoints are set")
    if departure_time is not None and arrival_time is not None:
        raise InvalidRequestError("Specify either departure_time or arrival_time, not both")
    if transit_mode and mode != "transit":
        raise InvalidRequestError("transit_mode requires mode='transit'")
    if traffic_model and departure_time is None:
        raise InvalidRequestError("traffic_model requires a departure_time")

    params: Dict[str, Any] = {
        "origin": convert.latlng(origin),
        "destination": convert.latlng(destination),
    }
    if mode:
        params["mode"] = mode
    if waypoints:
        waypoint_list = convert.location_list(waypoints)
        if optimize_waypoints:
            waypoint_list = "optimize:true|" + waypoint_list
        params["waypoints"] = waypoint_list
    if alternatives:
        params["alternatives"] = "true"
    if avoid:
        params["avoid"] = convert.join_list("|", avoid)
    if language:
        params["language"] = language
    if units:
        params["units"] = units
    if region:
        params["region"] = region
    if departure_time is not None:
        params["departure_time"] = convert.time(departure_time)
    if arrival_time is not None:
        params["arrival_time"] = convert.time(arrival_time)
    if traffic_model:
        params["traffic_model"] = traffic_model
    if transit_mode:
        params["transit_mode"] = convert.join_list("|", transit_mode)

    return client.get_request(endpoints.DIRECTIONS, params)["routes"]


def distance_matrix(client: GoogleMapsClient,
                    origins: Sequence[Any],
                    destinations: Sequence[Any],
                    mode: Optional[str] = None,
                    language: Optional[str] = None,
                    avoid: Optional[str] = None,
                    units: Optional[str] = None,
                    departure_time: Optional[Any] = None,
                    arrival_time: Optional[Any] = None,
                    region: Optional[str] = None) -> Dict[str, Any]:
    """
    Get travel distance and time for a matrix of origins and destinations.

    Returns:
        The full Distance Matrix API response

    Raises:
        InvalidRequestError: On conflicting arguments or too many locations
    """
    origin_list = convert.as_list(origins)
    destination_list = convert.as_list(destinations)

    if not origin_list or not destination_list:
        raise InvalidRequestError("At least one origin and one destination are required")
    if len(origin_list) > MAX_MATRIX_LOCATIONS or len(destination_list) > MAX_MATRIX_LOCATIONS:
        raise InvalidRequestError(
            f"At most {MAX_MATRIX_LOCATIONS} origins and {MAX_MATRIX_LOCATIONS} destinations are allowed"
        )
    if len(origin_list) * len(destination_list) > MAX_MATRIX_ELEMENTS:
        raise InvalidRequestError(f"At most {MAX_MATRIX_ELEMENTS} elements are allowed per request")
    _check_choice("mode", mode, TRAVEL_MODES)
    _check_choice("units", units, UNIT_SYSTEMS)
    _check_choice("avoid", avoid, AVOID_FEATURES)
    if departure_time is not None and arrival_time is not None:
        raise InvalidRequestError("Specify either departure_time or arrival_time, not both")

    params: Dict[str, Any] = {
        "origins": convert.location_list(origin_list),
        "destinations": convert.location_list(destination_list),
    }
    if mode:
        params["mode"] = mode
    if language:
        params["language"] = language
    if avoid:
        params["avoid"] = avoid
    if units:
        params["units"] = units
    if departure_time is not None:
        params["departure_time"] = convert.time(departure_time)
    if arrival_time is not None:
        params["arrival_time"] = convert.time(arrival_time)
    if region:
        params["region"] = region

    return client.get_request(endpoints.DISTANCE_MATRIX, params)


def elevation(client: GoogleMapsClient, locations: Any) -> List[Dict[str, Any]]:
    """Get the elevation of one or more locations."""
    params = {"locations": convert.shortest_path(locations)}
    return client.get_request(endpoints.ELEVATION, params)["results"]


def elevation_along_path(client: GoogleMapsClient, path: Any, samples: int) -> List[Dict[str, Any]]:
    """
    Get elevations sampled at equal distances along a path.

    path is a list of coordinates, or an already-encoded polyline string.
    """
    if not 1 <= samples <= MAX_ELEVATION_SAMPLES:
        raise InvalidRequestError(f"samples must be between 1 and {MAX_ELEVATION_SAMPLES}, got {samples}")

    if convert.is_string(path):
        path = "enc:%s" % path
    else:
        path = convert.shortest_path(path)

    params = {"path": path, "samples": samples}
    return client.get_request(endpoints.ELEVATION, params)["results"]


def timezone(client: GoogleMapsClient,
             location: Any,
             timestamp: Optional[Any] = None,
             language: Optional[str] = None) -> Dict[str, Any]:
    """Get the time zone of a location at a given time (defaults to now)."""
    params: Dict[str, Any] = {
        "location": convert.latlng(location),
        "timestamp": convert.time(timestamp if timestamp is not None else time.time()),
    }
    if language:
        params["language"] = language

    return client.get_request(endpoints.TIME_ZONE, params)


# ==================== PLACES API (NEW) ====================

def place_details(client: GoogleMapsClient,
                  place_id: str,
                  fields: Optional[Iterable[str]] = None,
                  language_code: Optional[str] = None,
                  region_code: Optional[str] = None,
                  session_token: Optional[str] = None) -> Dict[str, Any]:
    """Get the details of a place by its place ID."""
    if not place_id or not place_id.strip():
        raise InvalidRequestError("Empty place ID provided")

    params: Dict[str, Any] = {}
    if language_code:
        params["languageCode"] = language_code
    if region_code:
        params["regionCode"] = region_code
    if session_token:
        params["sessionToken"] = session_token

    return client.get_request(
        endpoints.PLACE_DETAILS,
        params,
        headers={FIELD_MASK_HEADER: field_mask(fields)},
        path_params={"place_id": place_id.strip()},
    )


def text_search(client: GoogleMapsClient,
                text_query: str,
                fields: Optional[Iterable[str]] = None,
                included_type: Optional[str] = None,
                language_code: Optional[str] = None,
                region_code: Optional[str] = None,
                open_now: Optional[bool] = None,
                page_size: Optional[int] = None,
                page_token: Optional[str] = None,
                location_bias: Optional[Any] = None,
                bias_radius: float = 5000.0) -> Dict[str, Any]:
    """Search for places matching a text query."""
    if not text_query or not text_query.strip():
        raise InvalidRequestError("Empty text query provided")
    if page_size is not None and not 1 <= page_size <= 20:
        raise InvalidRequestError(f"page_size must be between 1 and 20, got {page_size}")

    body = _compact({
        "textQuery": text_query,
        "includedType": included_type,
        "languageCode": language_code,
        "regionCode": region_code,
        "openNow": open_now,
        "pageSize": page_size,
        "pageToken": page_token,
        "locationBias": _circle(location_bias, bias_radius) if location_bias is not None else None,
    })

    return client.post_request(
        endpoints.TEXT_SEARCH,
        body,
        headers={FIELD_MASK_HEADER: field_mask(fields)},
    )


def nearby_search(client: GoogleMapsClient,
                  location: Any,
                  radius: float,
                  fields: Optional[Iterable[str]] = None,
                  included_types: Optional[Sequence[str]] = None,
                  excluded_types: Optional[Sequence[str]] = None,
                  max_result_count: Optional[int] = None,
                  language_code: Optional[str] = None,
                  rank_preference: Optional[str] = None) -> Dict[str, Any]:
    """Search for places within a circle."""
    if not 0 < radius <= MAX_NEARBY_RADIUS_METERS:
        raise InvalidRequestError(
            f"radius must be greater than 0 and at most {MAX_NEARBY_RADIUS_METERS:.0f} meters, got {radius}"
        )
    if max_result_count is not None and not 1 <= max_result_count <= 20:
        raise InvalidRequestError(f"max_result_count must be between 1 and 20, got {max_result_count}")
    _check_choice("rank_preference", rank_preference, {"POPULARITY", "DISTANCE"})

    body = _compact({
        "locationRestriction": _circle(location, radius),
        "includedTypes": list(included_types) if included_types else None,
        "excludedTypes": list(excluded_types) if excluded_types else None,
        "maxResultCount": max_result_count,
        "languageCode": language_code,
        "rankPreference": rank_preference,
    })

    return client.post_request(
        endpoints.NEARBY_SEARCH,
        body,
        headers={FIELD_MASK_HEADER: field_mask(fields)},
    )


def autocomplete(client: GoogleMapsClient,
                 input_text: str,
                 fields: Optional[Iterable[str]] = None,
                 location_bias: Optional[Any] = None,
                 bias_radius: float = 5000.0,
                 included_primary_types: Optional[Sequence[str]] = None,
                 language_code: Optional[str] = None,
                 region_code: Optional[str] = None,
                 session_token: Optional[str] = None) -> Dict[str, Any]:
    """Get place and query predictions for partially typed input."""
    if not input_text:
        raise InvalidRequestError("Empty autocomplete input provided")

    body = _compact({
        "input": input_text,
        "locationBias": _circle(location_bias, bias_radius) if location_bias is not None else None,
        "includedPrimaryTypes": list(included_primary_types) if included_primary_types else None,
        "languageCode": language_code,
        "regionCode": region_code,
        "sessionToken": session_token,
    })

    headers = {FIELD_MASK_HEADER: field_mask(fields)} if fields is not None else None
    return client.post_request(endpoints.AUTOCOMPLETE, body, headers=headers)


def place_photo(client: GoogleMapsClient,
                photo_name: str,
                max_width_px: Optional[int] = None,
                max_height_px: Optional[int] = None) -> bytes:
    """
    Download a place photo.

    Args:
        photo_name: Resource name, e.g. "places/PLACE_ID/photos/PHOTO_REF"
        max_width_px: Maximum width, 1 to 4800
        max_height_px: Maximum height, 1 to 4800

    Returns:
        Raw image bytes
    """
    if not photo_name or "/photos/" not in photo_name:
        raise InvalidRequestError(f"Invalid photo resource name: '{photo_name}'")
    if max_width_px is None and max_height_px is None:
        raise InvalidRequestError("At least one of max_width_px or max_height_px is required")

    params: Dict[str, Any] = {}
    for name, value in (("maxWidthPx", max_width_px), ("maxHeightPx", max_height_px)):
        if value is None:
            continue
        if not 1 <= value <= MAX_PHOTO_PX:
            raise InvalidRequestError(f"{name} must be between 1 and {MAX_PHOTO_PX}, got {value}")
        params[name] = value

    return client.get_request(
        endpoints.PLACE_PHOTO,
        params,
        path_params={"photo_name": photo_name.strip("/")},
    )


# ==================== ADDRESS VALIDATION ====================

def validate_address(client: GoogleMapsClient,
                     address_lines: Sequence[str],
                     region_code: Optional[str] = None,
                     locality: Optional[str] = None,
                     enable_usps_cass: bool = False,
                     session_token: Optional[str] = None) -> Dict[str, Any]:
    """
    Validate a postal address.

    Raises:
        InvalidRequestError: If the address is empty or longer than 280 characters
    """
    lines = convert.as_list(address_lines)
    if not any(line.strip() for line in lines):
        raise InvalidRequestError("At least one non-empty address line is required")
    total_chars = sum(len(line) for line in lines)
    if total_chars > MAX_ADDRESS_CHARS:
        raise InvalidRequestError(
            f"Address is {total_chars} characters long, the maximum is {MAX_ADDRESS_CHARS}"
        )

    address = _compact({
        "addressLines": list(lines),
        "regionCode": region_code,
        "locality": locality,
    })
    body = _compact({
        "address": address,
        "enableUspsCass": True if enable_usps_cass else None,
        "sessionToken": session_token,
    })

    return client.post_request(endpoints.VALIDATE_ADDRESS, body)


VALIDATION_CONCLUSIONS = {
    "VALIDATION_CONCLUSION_UNSPECIFIED",
    "VALIDATED_VERSION_USED",
    "USER_VERSION_USED",
    "UNVALIDATED_VERSION_USED",
    "UNUSED",
}


def provide_validation_feedback(client: GoogleMapsClient,
                                response_id: str,
                                conclusion: str = "UNUSED") -> None:
    """
    Report which version of an address was used after a validation sequence.

    Args:
        response_id: responseId of the first validate_address response
            in the sequence
        conclusion: One of VALIDATION_CONCLUSIONS
    """
    if not response_id or not response_id.strip():
        raise InvalidRequestError("Empty response ID provided")
    _check_choice("conclusion", conclusion, VALIDATION_CONCLUSIONS)

    client.post_request(
        endpoints.PROVIDE_VALIDATION_FEEDBACK,
        {"conclusion": conclusion, "responseId": response_id.strip()},
    )
