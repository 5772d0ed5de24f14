"""
geoquery: proximity queries over any store with ordered string range scans.

Locations are stored under their geohash; a circle query becomes a short
list of key-ranges whose union covers the circle.
"""
from geoquery.core.queries import geohash_queries
from geoquery.core.query_range import QueryRange
from geoquery.core.geohash import encode, decode
from geoquery.data.sources import RangeScanSource, InMemorySource, DataFrameSource
from geoquery.query.geo_query import GeoQueryService

__version__ = "0.1.0"

__all__ = [
    'geohash_queries',
    'QueryRange',
    'encode',
    'decode',
    'RangeScanSource',
    'InMemorySource',
    'DataFrameSource',
    'GeoQueryService',
]
