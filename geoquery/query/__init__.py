"""
Geo queries: circle queries executed against a range-scan source.
"""
from geoquery.query.geo_query import GeoQueryService, GeoQueryListener

__all__ = [
    'GeoQueryService',
    'GeoQueryListener',
]
