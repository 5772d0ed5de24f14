"""
Range queries that fully contain a circle.

Entry point for the range computation: picks a bit precision from the
radius, samples the bounding box and turns each sample into a key-range.
"""
import math
from typing import List, Sequence, Tuple

from geoquery.core.bounding_box import bounding_box_coordinates
from geoquery.core.geohash import _encode
from geoquery.core.math_utils import BITS_PER_CHAR
from geoquery.core.precision import bounding_box_bits
from geoquery.core.query_range import QueryRange, geohash_query
from geoquery.utils.logging_config import get_logger
from geoquery.utils.validation import validate_location, validate_radius

logger = get_logger(__name__)


def query_precision(center: Sequence[float], radius: float) -> Tuple[int, int]:
    """
    Get the (bits, characters) precision a circle query uses.

    Encode candidate points with the returned character count to compare
    them against the ranges of ``geohash_queries``.
    """
    query_bits = max(1, bounding_box_bits(center, radius))
    return query_bits, math.ceil(query_bits / BITS_PER_CHAR)


def geohash_queries(
    center: Sequence[float],
    radius: float,
    validate: bool = True
) -> List[QueryRange]:
    """
    Calculate the key-ranges whose union contains every geohash inside a circle.

    A scan of each range over geohash-sorted keys, unioned, returns every
    record inside the circle plus some outside it. Filtering by exact
    distance is left to the caller.

    Args:
        center: [latitude, longitude] of the circle center
        radius: Circle radius in meters
        validate: Reject invalid center or radius (default True)

    Returns:
        Distinct QueryRange values in sampling order (center first)

    Raises:
        InvalidLocationError: If ``validate`` and the center is invalid
        InvalidRadiusError: If ``validate`` and the radius is negative or not finite

    Example:
        >>> queries = geohash_queries([37.7749, -122.4194], 1000)
        >>> queries[0]
        QueryRange(start='9q8yyh', end='9q8yys')
    """
    if validate:
        validate_location(center)
        validate_radius(radius)

    query_bits, precision = query_precision(center, radius)
    coordinates = bounding_box_coordinates(center, radius)

    queries = []
    seen = set()
    for latitude, longitude in coordinates:
        query = geohash_query(_encode(latitude, longitude, precision), query_bits)
        if query not in seen:
            seen.add(query)
            queries.append(query)

    logger.debug(
        "query_ranges_computed",
        center=list(center),
        radius=radius,
        bits=query_bits,
        precision=precision,
        ranges=len(queries),
    )

    return queries
