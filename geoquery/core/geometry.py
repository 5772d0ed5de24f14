"""
Great-circle helpers for callers that post-filter range query results.

Uses a spherical earth (mean radius); range queries over-cover by more
than the spherical error, so these are fine for exact-distance filtering.
"""
import math
from typing import Tuple

from geoquery.core.math_utils import wrap_longitude


# Earth's radius in meters (mean radius)
EARTH_RADIUS_M = 6371000.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate great-circle distance between two points using Haversine formula.

    Args:
        lat1: Latitude of first point (decimal degrees)
        lon1: Longitude of first point (decimal degrees)
        lat2: Latitude of second point (decimal degrees)
        lon2: Longitude of second point (decimal degrees)

    Returns:
        Distance in meters

    Example:
        >>> # Post-filter a range query hit against a 5 km circle
        >>> center, hit = (37.7749, -122.4194), (37.7955, -122.3937)
        >>> haversine_distance(*center, *hit) <= 5000
        True

    References:
        https://en.wikipedia.org/wiki/Haversine_formula
    """
    lat1_rad = math.radians(lat1)
    lon1_rad = math.radians(lon1)
    lat2_rad = math.radians(lat2)
    lon2_rad = math.radians(lon2)

    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad

    a = (math.sin(dlat / 2)) ** 2 + \
        math.cos(lat1_rad) * math.cos(lat2_rad) * (math.sin(dlon / 2)) ** 2

    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def destination_point(lat: float, lon: float, bearing: float, distance: float) -> Tuple[float, float]:
    """
    Point reached by travelling ``distance`` meters from (lat, lon) on an initial ``bearing``.

    Args:
        lat: Latitude of starting point (decimal degrees)
        lon: Longitude of starting point (decimal degrees)
        bearing: Initial bearing in degrees clockwise from north
        distance: Distance in meters

    Returns:
        Tuple of (latitude, longitude); longitude wrapped into [-180, 180]

    References:
        https://www.movable-type.co.uk/scripts/latlong.html
    """
    lat_rad = math.radians(lat)
    lon_rad = math.radians(lon)
    bearing_rad = math.radians(bearing)
    angular = distance / EARTH_RADIUS_M

    lat2_rad = math.asin(
        math.sin(lat_rad) * math.cos(angular) +
        math.cos(lat_rad) * math.sin(angular) * math.cos(bearing_rad)
    )
    lon2_rad = lon_rad + math.atan2(
        math.sin(bearing_rad) * math.sin(angular) * math.cos(lat_rad),
        math.cos(angular) - math.sin(lat_rad) * math.sin(lat2_rad)
    )

    return math.degrees(lat2_rad), wrap_longitude(math.degrees(lon2_rad))
