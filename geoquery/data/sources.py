"""
Range-scan source abstraction layer.

Range queries only need one capability from a data store: an ordered scan
of one string field between two bounds. Stores implement RangeScanSource;
the geo query layer is handed an instance and never depends on a store.

Implementations:
- InMemorySource: dict-backed, supports live subscriptions
- DataFrameSource: read-only scans over a pandas DataFrame
"""
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

import pandas as pd

from geoquery.core.geohash import encode_geohash
from geoquery.core.math_utils import GEOHASH_PRECISION
from geoquery.utils.exceptions import (
    DataLoadError,
    DataSourceError,
    SubscriptionNotSupportedError,
)
from geoquery.utils.logging_config import get_logger

logger = get_logger(__name__)

ScanCallback = Callable[[Dict[str, Any]], None]


def geo_record(
    location: Sequence[float],
    precision: int = GEOHASH_PRECISION,
    field: str = "g"
) -> Dict[str, Any]:
    """
    Build the stored value for a keyed location.

    Example:
        >>> geo_record([37.7749, -122.4194], precision=6)
        {'g': '9q8yyk', 'l': [37.7749, -122.4194]}
    """
    return {field: encode_geohash(location, precision), 'l': [location[0], location[1]]}


class Subscription:
    """Handle for a live range scan; cancel() stops further callbacks."""

    def __init__(self, on_cancel: Optional[Callable[[], None]] = None):
        self._on_cancel = on_cancel
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        if self._on_cancel is not None:
            self._on_cancel()


class RangeScanSource(ABC):
    """Abstract base class for stores that can scan a sorted string field."""

    @abstractmethod
    def scan(self, path: str, order_by: str, start_at: str, end_at: str) -> Dict[str, Any]:
        """
        Get records under ``path`` with ``start_at <= record[order_by] < end_at``.

        Returns:
            Mapping of record key to record value
        """
        pass

    def watch(
        self,
        path: str,
        order_by: str,
        start_at: str,
        end_at: str,
        callback: ScanCallback
    ) -> Subscription:
        """
        Subscribe to a range scan.

        ``callback`` receives the full range snapshot whenever it changes.
        Sources without change notifications keep this default.

        Raises:
            SubscriptionNotSupportedError: Always, unless overridden
        """
        raise SubscriptionNotSupportedError(
            f"{type(self).__name__} does not support subscriptions", path=path
        )


def _in_range(value: Any, start_at: str, end_at: str) -> bool:
    return isinstance(value, str) and start_at <= value < end_at


class _Watch:
    """A registered subscription on an InMemorySource."""

    def __init__(self, path: str, order_by: str, start_at: str, end_at: str, callback: ScanCallback):
        self.path = path
        self.order_by = order_by
        self.start_at = start_at
        self.end_at = end_at
        self.callback = callback
        self.subscription = None

    def touches(self, *records: Optional[Dict[str, Any]]) -> bool:
        for record in records:
            if isinstance(record, dict) and _in_range(record.get(self.order_by), self.start_at, self.end_at):
                return True
        return False


class InMemorySource(RangeScanSource):
    """
    Dict-backed source holding ``{path: {key: record}}``.

    Callbacks run synchronously on the thread that mutates the source.
    Nothing is persisted.

    Example:
        >>> source = InMemorySource()
        >>> source.set("places", "ferry_building", geo_record([37.7955, -122.3937]))
        >>> list(source.scan("places", "g", "9q8z", "9q8z~"))
        ['ferry_building']
    """

    def __init__(self, data: Optional[Dict[str, Dict[str, Any]]] = None):
        self._data: Dict[str, Dict[str, Any]] = {
            path: dict(records) for path, records in (data or {}).items()
        }
        self._watches: List[_Watch] = []
        self._lock = threading.RLock()

    def scan(self, path: str, order_by: str, start_at: str, end_at: str) -> Dict[str, Any]:
        with self._lock:
            records = self._data.get(path, {})
            return {
                key: record
                for key, record in records.items()
                if isinstance(record, dict) and _in_range(record.get(order_by), start_at, end_at)
            }

    def watch(
        self,
        path: str,
        order_by: str,
        start_at: str,
        end_at: str,
        callback: ScanCallback
    ) -> Subscription:
        entry = _Watch(path, order_by, start_at, end_at, callback)

        def remove():
            with self._lock:
                if entry in self._watches:
                    self._watches.remove(entry)
            logger.debug("watch_cancelled", path=path, start_at=start_at, end_at=end_at)

        entry.subscription = Subscription(on_cancel=remove)
        with self._lock:
            self._watches.append(entry)
            snapshot = self.scan(path, order_by, start_at, end_at)

        logger.debug("watch_started", path=path, start_at=start_at, end_at=end_at, records=len(snapshot))
        try:
            callback(snapshot)
        except Exception:
            entry.subscription.cancel()
            raise
        return entry.subscription

    def get(self, path: str, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            return self._data.get(path, {}).get(key)

    def set(self, path: str, key: str, record: Dict[str, Any]) -> None:
        """Store ``record`` under ``path/key`` and notify affected watches."""
        if not isinstance(record, dict):
            raise DataSourceError(f"Record for '{key}' must be a dict, got {type(record).__name__}", path=path)
        with self._lock:
            previous = self._data.setdefault(path, {}).get(key)
            self._data[path][key] = record
        self._notify(path, previous, record)

    def remove(self, path: str, key: str) -> None:
        """Delete ``path/key`` if present and notify affected watches."""
        with self._lock:
            previous = self._data.get(path, {}).pop(key, None)
        if previous is not None:
            self._notify(path, previous, None)

    def _notify(self, path: str, previous, current) -> None:
        with self._lock:
            affected = [w for w in self._watches if w.path == path and w.touches(previous, current)]

        for entry in affected:
            if entry.subscription.active:
                entry.callback(self.scan(path, entry.order_by, entry.start_at, entry.end_at))


class DataFrameSource(RangeScanSource):
    """
    Read-only source over a pandas DataFrame, one row per record.

    ``path`` is ignored; the frame is the only collection.
    """

    def __init__(self, df: pd.DataFrame, key_column: str = "key"):
        if key_column not in df.columns:
            raise DataLoadError(
                f"Key column '{key_column}' not found. "
                f"Available columns: {sorted(df.columns.tolist())}"
            )
        self.key_column = key_column
        self.df = df

    @classmethod
    def from_csv(cls, csv_path, key_column: str = "key", geohash_column: str = "g") -> 'DataFrameSource':
        """
        Load a CSV of records, e.g. columns ``key,g,latitude,longitude``.

        Raises:
            DataLoadError: If the file is missing, unreadable or lacks ``key_column``
        """
        csv_path = Path(csv_path)
        if not csv_path.exists():
            raise DataLoadError(f"Failed to load locations: file not found: {csv_path}")

        try:
            # Geohashes like "0123" must stay strings
            header = pd.read_csv(csv_path, nrows=0).columns
            dtypes = {column: str for column in (key_column, geohash_column) if column in header}
            df = pd.read_csv(csv_path, dtype=dtypes)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise DataLoadError(f"Failed to parse {csv_path}: {e}") from e

        logger.info("locations_loaded", file=str(csv_path), rows=len(df))
        return cls(df, key_column=key_column)

    def scan(self, path: str, order_by: str, start_at: str, end_at: str) -> Dict[str, Any]:
        if order_by not in self.df.columns:
            raise DataSourceError(f"Cannot order by missing column '{order_by}'", path=path)

        values = self.df[order_by].astype(str)
        mask = self.df[order_by].notna() & (values >= start_at) & (values < end_at)
        matched = self.df.loc[mask]

        return {
            str(row[self.key_column]): {
                column: value for column, value in row.items() if column != self.key_column
            }
            for row in matched.to_dict(orient='records')
        }
