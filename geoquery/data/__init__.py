"""
Range-scan sources.

Provides the capability interface the geo query layer scans through,
plus in-process implementations.
"""
from geoquery.data.sources import (
    RangeScanSource,
    Subscription,
    InMemorySource,
    DataFrameSource,
    geo_record,
)

__all__ = [
    'RangeScanSource',
    'Subscription',
    'InMemorySource',
    'DataFrameSource',
    'geo_record',
]
