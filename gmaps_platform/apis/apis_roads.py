"""
Service functions for the Roads API.
"""

from typing import Any, Dict, List, Sequence

from googlemaps import convert

from ..transport.transport_client import GoogleMapsClient
from ..transport.transport_errors import InvalidRequestError
from . import apis_endpoints as endpoints


MAX_ROAD_POINTS = 100


def _point_list(points: Any, name: str) -> List[Any]:
    if isinstance(points, str):
        point_list = [point for point in points.split("|") if point]
    elif isinstance(points, (tuple, dict)):
        point_list = [points]
    else:
        point_list = list(points)

    if not point_list:
        raise InvalidRequestError(f"At least one point is required in {name}")
    if len(point_list) > MAX_ROAD_POINTS:
        raise InvalidRequestError(
            f"At most {MAX_ROAD_POINTS} points are allowed in {name}, got {len(point_list)}"
        )
    return point_list


def snap_to_roads(client: GoogleMapsClient,
                  path: Sequence[Any],
                  interpolate: bool = False) -> List[Dict[str, Any]]:
    """
    Snap GPS points to the most likely roads travelled.

    Args:
        path: Up to 100 coordinates, in travel order
        interpolate: Add points so the result follows the road geometry

    Returns:
        The "snappedPoints" list (empty if nothing could be snapped)
    """
    params: Dict[str, Any] = {"path": convert.location_list(_point_list(path, "path"))}
    if interpolate:
        params["interpolate"] = "true"

    return client.get_request(endpoints.SNAP_TO_ROADS, params).get("snappedPoints", [])


def nearest_roads(client: GoogleMapsClient, points: Sequence[Any]) -> List[Dict[str, Any]]:
    """Find the nearest road segment for each of up to 100 points."""
    params = {"points": convert.location_list(_point_list(points, "points"))}
    return client.get_request(endpoints.NEAREST_ROADS, params).get("snappedPoints", [])
