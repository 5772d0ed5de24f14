"""
Geo queries over a range-scan source.

Each circle query becomes one scan (or one subscription) per key-range;
partial results are merged by record key. Results are a superset of the
circle; callers filter by exact distance.
"""
import threading
from typing import Any, Callable, Dict, List, Optional, Sequence

from geoquery.core.queries import geohash_queries
from geoquery.core.query_range import QueryRange
from geoquery.data.sources import RangeScanSource, Subscription, geo_record
from geoquery.utils.config import QueryConfig, get_default_config
from geoquery.utils.exceptions import DataSourceError
from geoquery.utils.logging_config import get_logger

logger = get_logger(__name__)

ResultCallback = Callable[[Dict[str, Any]], None]


class GeoQueryListener:
    """
    Live merged view of several range subscriptions.

    Each range keeps its own latest snapshot; the merged result is the
    union of all snapshots, later ranges winning on key collisions.
    """

    def __init__(self, queries: List[QueryRange], callback: ResultCallback):
        self.queries = queries
        self._callback = callback
        self._snapshots: Dict[int, Dict[str, Any]] = {}
        self._subscriptions: List[Subscription] = []
        self._lock = threading.Lock()
        self._cancelled = False

    @property
    def active(self) -> bool:
        return not self._cancelled

    @property
    def results(self) -> Dict[str, Any]:
        """Current merged records."""
        with self._lock:
            return self._merge()

    def _merge(self) -> Dict[str, Any]:
        merged = {}
        for index in sorted(self._snapshots):
            merged.update(self._snapshots[index])
        return merged

    def _on_update(self, index: int, value: Optional[Dict[str, Any]]) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._snapshots[index] = dict(value or {})
            merged = self._merge()
        self._callback(merged)

    def _attach(self, subscription: Subscription) -> None:
        with self._lock:
            cancelled = self._cancelled
            if not cancelled:
                self._subscriptions.append(subscription)
        if cancelled:
            subscription.cancel()

    def cancel(self) -> None:
        """Cancel every range subscription. Safe to call more than once."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            subscriptions, self._subscriptions = self._subscriptions, []

        for subscription in subscriptions:
            subscription.cancel()
        logger.debug("geo_query_cancelled", ranges=len(self.queries))


class GeoQueryService:
    """
    Store, query and listen for keyed locations on an injected source.

    Example:
        >>> source = InMemorySource()
        >>> service = GeoQueryService(source)
        >>> service.set_location("places", "ferry_building", [37.7955, -122.3937])
        >>> sorted(service.query_at("places", [37.7749, -122.4194], 5000))
        ['ferry_building']
    """

    def __init__(self, source: RangeScanSource, config: Optional[QueryConfig] = None):
        self.source = source
        self.config = config or get_default_config()

    def queries_for(self, center: Sequence[float], radius: float) -> List[QueryRange]:
        return geohash_queries(center, radius, validate=self.config.validate_inputs)

    def set_location(self, path: str, key: str, location: Sequence[float]) -> Dict[str, Any]:
        """
        Store ``location`` under ``path/key`` as a geo record.

        Raises:
            DataSourceError: If the source is read-only
            InvalidLocationError: If the location is invalid
        """
        setter = getattr(self.source, 'set', None)
        if not callable(setter):
            raise DataSourceError(f"{type(self.source).__name__} is read-only", path=path)

        record = geo_record(location, self.config.geohash_precision, self.config.geohash_field)
        setter(path, key, record)
        return record

    def query_at(self, path: str, center: Sequence[float], radius: float) -> Dict[str, Any]:
        """One-shot query: scan every range once and merge the results."""
        results: Dict[str, Any] = {}
        queries = self.queries_for(center, radius)
        for query in queries:
            results.update(
                self.source.scan(path, self.config.geohash_field, query.start, query.end)
            )

        logger.debug("geo_query_scanned", path=path, ranges=len(queries), records=len(results))
        return results

    def listen_at(
        self,
        path: str,
        center: Sequence[float],
        radius: float,
        callback: ResultCallback
    ) -> GeoQueryListener:
        """
        Live query: subscribe to every range and emit merged results on each update.

        ``callback`` receives the merged mapping of record key to value
        every time any range reports. Cancel the returned listener to stop.

        Raises:
            SubscriptionNotSupportedError: If the source cannot watch ranges
        """
        queries = self.queries_for(center, radius)
        listener = GeoQueryListener(queries, callback)

        try:
            for index, query in enumerate(queries):
                subscription = self.source.watch(
                    path,
                    self.config.geohash_field,
                    query.start,
                    query.end,
                    lambda value, index=index: listener._on_update(index, value),
                )
                listener._attach(subscription)
        except Exception:
            listener.cancel()
            raise

        logger.info("geo_query_listening", path=path, radius=radius, ranges=len(queries))
        return listener
