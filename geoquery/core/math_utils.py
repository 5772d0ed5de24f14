"""
Numeric helpers and earth constants used by the geohash range queries.

Distances use the WGS84 ellipsoid where longitude spans are concerned,
since a degree of longitude shrinks with latitude.
"""
import math

# Characters used in location geohashes, in ascending bit-value order
BASE32 = "0123456789bcdefghjkmnpqrstuvwxyz"

# Default geohash length when storing a location
GEOHASH_PRECISION = 10

BITS_PER_CHAR = 5

# 22 characters is the longest geohash worth generating for a double
MAXIMUM_BITS_PRECISION = 22 * BITS_PER_CHAR

# Meridional circumference of the earth in meters
EARTH_MERI_CIRCUMFERENCE = 40007860

# Length of a degree of latitude at the equator in meters
METERS_PER_DEGREE_LATITUDE = 110574

# Equatorial radius of the earth in meters
EARTH_EQ_RADIUS = 6378137.0

# Eccentricity squared, (a^2 - b^2) / a^2 with a polar radius of 6356752.3 m.
# Exact value to avoid rounding errors.
E2 = 0.00669447819799

# Cutoff for rounding errors on float calculations
EPSILON = 1e-12


def degrees_to_radians(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * math.pi / 180


def log2(x: float) -> float:
    return math.log(x) / math.log(2)


def meters_to_longitude_degrees(distance: float, latitude: float) -> float:
    """
    Convert a distance to degrees of longitude at a given latitude.

    Args:
        distance: Distance in meters
        latitude: Latitude in decimal degrees at which to measure

    Returns:
        Longitude span in degrees, capped at 360

    Example:
        >>> round(meters_to_longitude_degrees(111319.49, 0), 4)
        1.0
        >>> meters_to_longitude_degrees(1000, 90)
        360
    """
    radians = degrees_to_radians(latitude)
    num = math.cos(radians) * EARTH_EQ_RADIUS * math.pi / 180
    denom = 1 / math.sqrt(1 - E2 * math.sin(radians) * math.sin(radians))
    delta_deg = num * denom

    if delta_deg < EPSILON:
        # Meridians converge; any distance spans the whole circle
        return 360 if distance > 0 else 0
    return min(360, distance / delta_deg)


def wrap_longitude(longitude: float) -> float:
    """
    Wrap a longitude into [-180, 180] through the antimeridian.

    Example:
        >>> wrap_longitude(190)
        -170
        >>> wrap_longitude(-190)
        170
    """
    if -180 <= longitude <= 180:
        return longitude

    adjusted = longitude + 180
    if adjusted > 0:
        return (adjusted % 360) - 180
    return 180 - (-adjusted % 360)
