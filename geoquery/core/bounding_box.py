"""
Sample points on the bounding box of a circular query region.
"""
from typing import List, Sequence, Tuple

from geoquery.core.math_utils import (
    METERS_PER_DEGREE_LATITUDE,
    meters_to_longitude_degrees,
    wrap_longitude,
)


def _box_edges(center: Sequence[float], radius: float) -> Tuple[float, float, float]:
    """Return (latitude_north, latitude_south, longitude_degrees) for the box."""
    lat_degrees = radius / METERS_PER_DEGREE_LATITUDE
    latitude_north = min(90, center[0] + lat_degrees)
    latitude_south = max(-90, center[0] - lat_degrees)

    # The wider of the two edges covers the whole box
    long_degs_north = meters_to_longitude_degrees(radius, latitude_north)
    long_degs_south = meters_to_longitude_degrees(radius, latitude_south)
    long_degs = max(long_degs_north, long_degs_south)

    return latitude_north, latitude_south, long_degs


def bounding_box(center: Sequence[float], radius: float) -> Tuple[float, float, float, float]:
    """
    Get the lat/lon box containing a circle.

    Longitudes are not wrapped, so ``west`` may be below -180 and ``east``
    above 180 when the box crosses the antimeridian.

    Args:
        center: [latitude, longitude] of the circle center
        radius: Circle radius in meters

    Returns:
        Tuple of (south, north, west, east) in decimal degrees
    """
    latitude_north, latitude_south, long_degs = _box_edges(center, radius)
    return latitude_south, latitude_north, center[1] - long_degs, center[1] + long_degs


def bounding_box_coordinates(center: Sequence[float], radius: float) -> List[Tuple[float, float]]:
    """
    Calculate the center and eight points on the bounding box of a circle.

    At least one of these nine coordinates, encoded to the bit precision
    chosen by ``bounding_box_bits``, shares its prefix with the geohash
    of any point inside the circle.

    Args:
        center: [latitude, longitude] of the circle center
        radius: Circle radius in meters

    Returns:
        Nine (latitude, longitude) tuples: center, west, east, then north
        and south edges each at center, west and east longitude.
    """
    latitude, longitude = center[0], wrap_longitude(center[1])
    latitude_north, latitude_south, long_degs = _box_edges(center, radius)

    west = wrap_longitude(longitude - long_degs)
    east = wrap_longitude(longitude + long_degs)

    return [
        (latitude, longitude),
        (latitude, west),
        (latitude, east),
        (latitude_north, longitude),
        (latitude_north, west),
        (latitude_north, east),
        (latitude_south, longitude),
        (latitude_south, west),
        (latitude_south, east),
    ]
