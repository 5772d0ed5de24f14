"""
Bit precision needed for a geohash cell to span a given distance.

A geohash with ``b`` bits spends ``ceil(b / 2)`` of them on longitude and
``floor(b / 2)`` on latitude, so the latitude and longitude requirements
are computed separately and combined conservatively.
"""
import math
from typing import Sequence

from geoquery.core.math_utils import (
    EARTH_MERI_CIRCUMFERENCE,
    MAXIMUM_BITS_PRECISION,
    METERS_PER_DEGREE_LATITUDE,
    log2,
    meters_to_longitude_degrees,
)


def latitude_bits_for_resolution(resolution: float) -> float:
    """
    Bits of latitude needed for a cell height of ``resolution`` meters.

    Args:
        resolution: Desired cell height in meters

    Returns:
        Fractional bit count, capped at MAXIMUM_BITS_PRECISION

    Example:
        >>> round(latitude_bits_for_resolution(1000), 2)
        14.29
    """
    if resolution <= 0:
        return float(MAXIMUM_BITS_PRECISION)
    return min(log2(EARTH_MERI_CIRCUMFERENCE / 2 / resolution), float(MAXIMUM_BITS_PRECISION))


def longitude_bits_for_resolution(resolution: float, latitude: float) -> float:
    """
    Bits of longitude needed for a cell width of ``resolution`` meters at ``latitude``.

    Near the poles the longitude span of any distance approaches the whole
    circle, in which case a single bit is enough.

    Args:
        resolution: Desired cell width in meters
        latitude: Latitude in decimal degrees where the width is measured

    Returns:
        Fractional bit count, at least 1
    """
    degs = meters_to_longitude_degrees(resolution, latitude)
    if abs(degs) > 0.000001:
        return max(1.0, log2(360 / degs))
    return 1.0


def bounding_box_bits(coordinate: Sequence[float], size: float) -> int:
    """
    Maximum number of geohash bits whose cells still span a box of ``size`` meters.

    Takes the minimum over the latitude requirement and the longitude
    requirement at both the north and south edge of the box, since
    longitude cells narrow towards the poles.

    Args:
        coordinate: [latitude, longitude] of the box center
        size: Half-width of the box in meters (the query radius)

    Returns:
        Bit count, at most MAXIMUM_BITS_PRECISION. May be below 1 for very
        large boxes; callers clamp.

    Example:
        >>> bounding_box_bits([37.7749, -122.4194], 1000)
        27
    """
    lat_delta_degrees = size / METERS_PER_DEGREE_LATITUDE
    latitude_north = min(90, coordinate[0] + lat_delta_degrees)
    latitude_south = max(-90, coordinate[0] - lat_delta_degrees)

    bits_lat = math.floor(latitude_bits_for_resolution(size)) * 2
    bits_long_north = math.floor(longitude_bits_for_resolution(size, latitude_north)) * 2 - 1
    bits_long_south = math.floor(longitude_bits_for_resolution(size, latitude_south)) * 2 - 1

    return min(bits_lat, bits_long_north, bits_long_south, MAXIMUM_BITS_PRECISION)
