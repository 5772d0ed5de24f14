"""
Geohash encoding and decoding utilities.

Provides functions to convert between geohash strings and lat/lon coordinates.
Bits alternate longitude, latitude, starting with longitude; every five bits
map to one character of BASE32, most significant bit first.
"""
from typing import List, Optional, Sequence, Tuple

from shapely.geometry import Polygon

from geoquery.core.math_utils import BASE32, BITS_PER_CHAR, GEOHASH_PRECISION
from geoquery.utils.validation import (
    validate_bits,
    validate_geohash,
    validate_location,
    validate_precision,
)


def _encode(latitude: float, longitude: float, precision: int) -> str:
    """Encode without validating arguments."""
    lat_range = [-90.0, 90.0]
    lon_range = [-180.0, 180.0]

    geohash = []
    hash_value = 0
    bit_count = 0
    is_even = True  # Start with longitude

    while len(geohash) < precision:
        if is_even:
            value, interval = longitude, lon_range
        else:
            value, interval = latitude, lat_range

        mid = (interval[0] + interval[1]) / 2
        if value > mid:
            hash_value = (hash_value << 1) + 1
            interval[0] = mid
        else:
            hash_value = hash_value << 1
            interval[1] = mid

        is_even = not is_even
        bit_count += 1

        if bit_count == BITS_PER_CHAR:
            geohash.append(BASE32[hash_value])
            hash_value = 0
            bit_count = 0

    return ''.join(geohash)


def encode(latitude: float, longitude: float, precision: int = GEOHASH_PRECISION) -> str:
    """
    Encode latitude/longitude to a geohash string.

    Args:
        latitude: Latitude in decimal degrees (-90 to 90)
        longitude: Longitude in decimal degrees (-180 to 180)
        precision: Number of characters in geohash (1 to 22, default 10)

    Returns:
        Geohash string of exactly ``precision`` characters

    Example:
        >>> encode(37.7749, -122.4194, precision=6)
        '9q8yyk'

    Raises:
        InvalidLocationError: If lat/lon out of valid range
        InvalidPrecisionError: If precision is not an integer in 1-22
    """
    validate_location((latitude, longitude))
    validate_precision(precision)
    return _encode(latitude, longitude, precision)


def encode_geohash(location: Sequence[float], precision: int = GEOHASH_PRECISION) -> str:
    """Encode a [latitude, longitude] pair; see ``encode``."""
    validate_location(location)
    return encode(location[0], location[1], precision)


def geohash_bits(geohash: str) -> str:
    """
    Get the bit string of a geohash.

    Example:
        >>> geohash_bits("9q")
        '0100110110'
    """
    validate_geohash(geohash)
    return ''.join(format(BASE32.index(char), '05b') for char in geohash)


def _cell_intervals(geohash: str, bits: Optional[int]) -> Tuple[List[float], List[float]]:
    """Narrow lat/lon intervals by the first ``bits`` bits of a geohash."""
    validate_geohash(geohash)
    total_bits = len(geohash) * BITS_PER_CHAR
    if bits is None:
        bits = total_bits
    else:
        validate_bits(bits)
        bits = min(bits, total_bits)

    lat_range = [-90.0, 90.0]
    lon_range = [-180.0, 180.0]

    is_even = True
    for position, bit in enumerate(geohash_bits(geohash)):
        if position >= bits:
            break

        interval = lon_range if is_even else lat_range
        mid = (interval[0] + interval[1]) / 2
        if bit == '1':
            interval[0] = mid
        else:
            interval[1] = mid

        is_even = not is_even

    return lat_range, lon_range


def decode(geohash: str) -> Tuple[float, float]:
    """
    Decode a geohash string to latitude/longitude coordinates.

    Returns the center point of the geohash box.

    Args:
        geohash: Geohash string (e.g., "9q8yyk")

    Returns:
        Tuple of (latitude, longitude) in decimal degrees

    Raises:
        InvalidGeohashError: If the geohash contains non-base32 characters

    References:
        https://en.wikipedia.org/wiki/Geohash
    """
    lat_range, lon_range = _cell_intervals(geohash, None)
    latitude = (lat_range[0] + lat_range[1]) / 2
    longitude = (lon_range[0] + lon_range[1]) / 2
    return latitude, longitude


def get_box_bounds(geohash: str, bits: Optional[int] = None) -> Tuple[float, float, float, float]:
    """
    Get the bounding box for a geohash, or for its first ``bits`` bits.

    Args:
        geohash: Geohash string
        bits: Number of leading bits describing the cell (default: all)

    Returns:
        Tuple of (min_lat, max_lat, min_lon, max_lon)

    Example:
        >>> get_box_bounds("s", bits=1)
        (-90.0, 90.0, 0.0, 180.0)
    """
    lat_range, lon_range = _cell_intervals(geohash, bits)
    return lat_range[0], lat_range[1], lon_range[0], lon_range[1]


def geohash_polygon(geohash: str, bits: Optional[int] = None) -> Polygon:
    """
    Convert a geohash cell to a Shapely Polygon (x = longitude, y = latitude).

    Args:
        geohash: Geohash string
        bits: Number of leading bits describing the cell (default: all)

    Returns:
        Shapely Polygon representing the geohash bounding box
    """
    min_lat, max_lat, min_lon, max_lon = get_box_bounds(geohash, bits)

    return Polygon([
        (min_lon, min_lat),
        (min_lon, max_lat),
        (max_lon, max_lat),
        (max_lon, min_lat),
        (min_lon, min_lat)
    ])
