"""
Input validation for locations, radii, geohashes and precisions.

The range computation itself clamps and wraps rather than failing, so
these checks are the only place bad input is reported.
"""
import math
from numbers import Real

from geoquery.core.math_utils import BASE32, BITS_PER_CHAR, MAXIMUM_BITS_PRECISION
from geoquery.utils.exceptions import (
    InvalidGeohashError,
    InvalidLocationError,
    InvalidPrecisionError,
    InvalidRadiusError,
)

MAX_PRECISION_CHARS = MAXIMUM_BITS_PRECISION // BITS_PER_CHAR
MAX_BITS = MAXIMUM_BITS_PRECISION


def _is_finite_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def validate_location(location) -> None:
    """
    Validate a [latitude, longitude] pair.

    Args:
        location: Two-element sequence of (latitude, longitude) in degrees

    Raises:
        InvalidLocationError: If the shape is wrong or a value is out of range
    """
    if isinstance(location, (str, bytes)) or not hasattr(location, '__len__'):
        raise InvalidLocationError("Location must be a [latitude, longitude] pair", location)
    if len(location) != 2:
        raise InvalidLocationError(
            f"Location must have exactly 2 elements, got {len(location)}", location
        )

    latitude, longitude = location
    if not _is_finite_number(latitude):
        raise InvalidLocationError("Latitude must be a finite number", location)
    if not _is_finite_number(longitude):
        raise InvalidLocationError("Longitude must be a finite number", location)
    if not (-90 <= latitude <= 90):
        raise InvalidLocationError(f"Latitude must be in [-90, 90], got {latitude}", location)
    if not (-180 <= longitude <= 180):
        raise InvalidLocationError(f"Longitude must be in [-180, 180], got {longitude}", location)


def validate_radius(radius) -> None:
    """Validate a query radius in meters."""
    if not _is_finite_number(radius):
        raise InvalidRadiusError(f"Radius must be a finite number, got {radius!r}")
    if radius < 0:
        raise InvalidRadiusError(f"Radius must be >= 0, got {radius}")


def validate_geohash(geohash) -> None:
    """
    Validate that a geohash is a non-empty base32 string.

    Raises:
        InvalidGeohashError: If empty, not a string, or has invalid characters
    """
    if not isinstance(geohash, str):
        raise InvalidGeohashError(f"Geohash must be a string, got {type(geohash).__name__}")
    if not geohash:
        raise InvalidGeohashError("Geohash must not be empty")
    for char in geohash:
        if char not in BASE32:
            raise InvalidGeohashError(f"Invalid geohash character: {char!r} in {geohash!r}")


def validate_precision(precision) -> None:
    """Validate a geohash length in characters (1-22)."""
    if not isinstance(precision, int) or isinstance(precision, bool):
        raise InvalidPrecisionError(f"Precision must be an integer, got {precision!r}")
    if precision <= 0:
        raise InvalidPrecisionError("Precision must be greater than 0")
    if precision > MAX_PRECISION_CHARS:
        raise InvalidPrecisionError(
            f"Precision cannot be greater than {MAX_PRECISION_CHARS}, got {precision}"
        )


def validate_bits(bits) -> None:
    """Validate a bit count for range queries (1-110)."""
    if not isinstance(bits, int) or isinstance(bits, bool):
        raise InvalidPrecisionError(f"Bits must be an integer, got {bits!r}")
    if not (1 <= bits <= MAX_BITS):
        raise InvalidPrecisionError(f"Bits must be in [1, {MAX_BITS}], got {bits}")
