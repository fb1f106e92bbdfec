"""
Service functions for the legacy Places API.

These use the maps.googleapis.com/maps/api/place endpoints with the
status-envelope responses and count against the "Places" rate limit.
The Places API (New) functions live in apis_services.
"""

from typing import Any, Dict, List, Optional, Sequence

from googlemaps import convert

from ..transport.transport_client import GoogleMapsClient
from ..transport.transport_errors import InvalidRequestError
from . import apis_endpoints as endpoints
from .apis_services import MAX_NEARBY_RADIUS_METERS, _check_choice


RANK_BY = {"prominence", "distance"}
REVIEWS_SORT = {"most_relevant", "newest"}
MAX_AUTOCOMPLETE_COUNTRIES = 5


def _check_radius(radius: Optional[float]) -> None:
    if radius is not None and not 0 < radius <= MAX_NEARBY_RADIUS_METERS:
        raise InvalidRequestError(
            f"radius must be greater than 0 and at most {MAX_NEARBY_RADIUS_METERS:.0f} meters, got {radius}"
        )


def _price_params(min_price: Optional[int], max_price: Optional[int]) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    for name, value in (("minprice", min_price), ("maxprice", max_price)):
        if value is None:
            continue
        if not 0 <= value <= 4:
            raise InvalidRequestError(f"{name} must be between 0 and 4, got {value}")
        params[name] = value
    if min_price is not None and max_price is not None and min_price > max_price:
        raise InvalidRequestError(f"minprice {min_price} is greater than maxprice {max_price}")
    return params


def legacy_nearby_search(client: GoogleMapsClient,
                         location: Optional[Any] = None,
                         radius: Optional[float] = None,
                         keyword: Optional[str] = None,
                         name: Optional[str] = None,
                         place_type: Optional[str] = None,
                         language: Optional[str] = None,
                         min_price: Optional[int] = None,
                         max_price: Optional[int] = None,
                         open_now: bool = False,
                         rank_by: Optional[str] = None,
                         page_token: Optional[str] = None) -> Dict[str, Any]:
    """
    Search for places around a location.

    With rank_by="distance" there is no radius and at least one of
    keyword, name or place_type is required. Otherwise a radius is
    required. A page_token alone fetches the next page of a previous search.

    Returns:
        The full response, including "results" and "next_page_token"
    """
    if page_token:
        return client.get_request(endpoints.PLACES_NEARBY_SEARCH, {"pagetoken": page_token})

    if location is None:
        raise InvalidRequestError("Nearby search requires a location")
    _check_choice("rank_by", rank_by, RANK_BY)
    if rank_by == "distance":
        if radius is not None:
            raise InvalidRequestError("radius cannot be set when rank_by is 'distance'")
        if not (keyword or name or place_type):
            raise InvalidRequestError("rank_by='distance' requires a keyword, name or place_type")
    elif radius is None:
        raise InvalidRequestError("Nearby search requires a radius unless rank_by is 'distance'")
    _check_radius(radius)

    params: Dict[str, Any] = {"location": convert.latlng(location)}
    if radius is not None:
        params["radius"] = radius
    if keyword:
        params["keyword"] = keyword
    if name:
        params["name"] = name
    if place_type:
        params["type"] = place_type
    if language:
        params["language"] = language
    if open_now:
        params["opennow"] = "true"
    if rank_by:
        params["rankby"] = rank_by
    params.update(_price_params(min_price, max_price))

    return client.get_request(endpoints.PLACES_NEARBY_SEARCH, params)


def legacy_text_search(client: GoogleMapsClient,
                       query: Optional[str] = None,
                       location: Optional[Any] = None,
                       radius: Optional[float] = None,
                       language: Optional[str] = None,
                       region: Optional[str] = None,
                       place_type: Optional[str] = None,
                       min_price: Optional[int] = None,
                       max_price: Optional[int] = None,
                       open_now: bool = False,
                       page_token: Optional[str] = None) -> Dict[str, Any]:
    """Search for places matching a text query or a place type."""
    if page_token:
        return client.get_request(endpoints.PLACES_TEXT_SEARCH, {"pagetoken": page_token})

    if not query and not place_type:
        raise InvalidRequestError("Text search requires a query or a place_type")
    if (location is None) != (radius is None):
        raise InvalidRequestError("location and radius must be given together")
    _check_radius(radius)

    params: Dict[str, Any] = {}
    if query:
        params["query"] = query
    if location is not None:
        params["location"] = convert.latlng(location)
        params["radius"] = radius
    if language:
        params["language"] = language
    if region:
        params["region"] = region
    if place_type:
        params["type"] = place_type
    if open_now:
        params["opennow"] = "true"
    params.update(_price_params(min_price, max_price))

    return client.get_request(endpoints.PLACES_TEXT_SEARCH, params)


def legacy_place_details(client: GoogleMapsClient,
                         place_id: str,
                         fields: Optional[Sequence[str]] = None,
                         language: Optional[str] = None,
                         region: Optional[str] = None,
                         session_token: Optional[str] = None,
                         reviews_sort: Optional[str] = None,
                         reviews_no_translations: bool = False) -> Dict[str, Any]:
    """
    Get the details of a place.

    Returns:
        The "result" object of the response
    """
    if not place_id or not place_id.strip():
        raise InvalidRequestError("Empty place ID provided")
    _check_choice("reviews_sort", reviews_sort, REVIEWS_SORT)

    params: Dict[str, Any] = {"place_id": place_id.strip()}
    if fields:
        params["fields"] = convert.join_list(",", fields)
    if language:
        params["language"] = language
    if region:
        params["region"] = region
    if session_token:
        params["sessiontoken"] = session_token
    if reviews_sort:
        params["reviews_sort"] = reviews_sort
    if reviews_no_translations:
        params["reviews_no_translations"] = "true"

    return client.get_request(endpoints.PLACES_DETAILS, params)["result"]


def legacy_autocomplete(client: GoogleMapsClient,
                        input_text: str,
                        session_token: Optional[str] = None,
                        offset: Optional[int] = None,
                        origin: Optional[Any] = None,
                        location: Optional[Any] = None,
                        radius: Optional[float] = None,
                        language: Optional[str] = None,
                        types: Optional[Sequence[str]] = None,
                        components: Optional[Dict[str, Any]] = None,
                        strict_bounds: bool = False) -> List[Dict[str, Any]]:
    """
    Get place predictions for partially typed input.

    components may only restrict by country, e.g. {"country": ["fr", "be"]}.

    Returns:
        The "predictions" list of the response
    """
    if not input_text:
        raise InvalidRequestError("Empty autocomplete input provided")
    if offset is not None and not 0 <= offset <= len(input_text):
        raise InvalidRequestError(f"offset must be between 0 and {len(input_text)}, got {offset}")
    if components:
        if set(components) != {"country"}:
            raise InvalidRequestError("Only the 'country' component is supported by autocomplete")
        if len(convert.as_list(components["country"])) > MAX_AUTOCOMPLETE_COUNTRIES:
            raise InvalidRequestError(f"At most {MAX_AUTOCOMPLETE_COUNTRIES} countries are allowed")
    if strict_bounds and (location is None or radius is None):
        raise InvalidRequestError("strict_bounds requires a location and a radius")
    _check_radius(radius)

    params: Dict[str, Any] = {"input": input_text}
    if session_token:
        params["sessiontoken"] = session_token
    if offset is not None:
        params["offset"] = offset
    if origin is not None:
        params["origin"] = convert.latlng(origin)
    if location is not None:
        params["location"] = convert.latlng(location)
    if radius is not None:
        params["radius"] = radius
    if language:
        params["language"] = language
    if types:
        params["types"] = convert.join_list("|", types)
    if components:
        params["components"] = convert.components(components)
    if strict_bounds:
        params["strictbounds"] = "true"

    return client.get_request(endpoints.PLACES_AUTOCOMPLETE, params)["predictions"]


def legacy_query_autocomplete(client: GoogleMapsClient,
                              input_text: str,
                              offset: Optional[int] = None,
                              location: Optional[Any] = None,
                              radius: Optional[float] = None,
                              language: Optional[str] = None) -> List[Dict[str, Any]]:
    """Get query predictions ("pizza near ...") for partially typed input."""
    if not input_text:
        raise InvalidRequestError("Empty autocomplete input provided")
    if offset is not None and not 0 <= offset <= len(input_text):
        raise InvalidRequestError(f"offset must be between 0 and {len(input_text)}, got {offset}")
    _check_radius(radius)

    params: Dict[str, Any] = {"input": input_text}
    if offset is not None:
        params["offset"] = offset
    if location is not None:
        params["location"] = convert.latlng(location)
    if radius is not None:
        params["radius"] = radius
    if language:
        params["language"] = language

    return client.get_request(endpoints.PLACES_QUERY_AUTOCOMPLETE, params)["predictions"]
