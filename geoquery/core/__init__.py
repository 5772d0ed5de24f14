"""
Geohash range computation.

Pure functions with no store dependency: encoding, precision selection,
bounding-box sampling and key-range construction.
"""
from geoquery.core.geohash import (
    encode,
    encode_geohash,
    decode,
    get_box_bounds,
    geohash_polygon,
)
from geoquery.core.math_utils import BASE32, GEOHASH_PRECISION, wrap_longitude
from geoquery.core.queries import geohash_queries, query_precision
from geoquery.core.query_range import QueryRange, SENTINEL, geohash_query
from geoquery.core.geometry import haversine_distance, destination_point

__all__ = [
    'encode',
    'encode_geohash',
    'decode',
    'get_box_bounds',
    'geohash_polygon',
    'BASE32',
    'GEOHASH_PRECISION',
    'wrap_longitude',
    'geohash_queries',
    'query_precision',
    'QueryRange',
    'SENTINEL',
    'geohash_query',
    'haversine_distance',
    'destination_point',
]
