"""
Tests for range-scan sources.
"""
import pandas as pd
import pytest
from geoquery.data.sources import (
    DataFrameSource,
    InMemorySource,
    RangeScanSource,
    Subscription,
    geo_record,
)
from geoquery.utils.exceptions import (
    DataLoadError,
    DataSourceError,
    SubscriptionNotSupportedError,
)


@pytest.fixture
def source():
    src = InMemorySource()
    src.set("places", "at_start", {"g": "9q8yyh"})
    src.set("places", "inside", {"g": "9q8yyk8yt"})
    src.set("places", "at_end", {"g": "9q8yys"})
    src.set("places", "far", {"g": "dr5regw3p"})
    src.set("places", "no_geohash", {"name": "unknown"})
    return src


class TestGeoRecord:
    """Tests for geo_record."""

    def test_default_field(self):
        assert geo_record([37.7749, -122.4194], precision=6) == {
            "g": "9q8yyk",
            "l": [37.7749, -122.4194],
        }

    def test_custom_field(self):
        record = geo_record((37.7749, -122.4194), precision=4, field="geohash")
        assert record["geohash"] == "9q8y"


class TestInMemoryScan:
    """Tests for InMemorySource.scan."""

    def test_half_open_range(self, source):
        result = source.scan("places", "g", "9q8yyh", "9q8yys")
        assert sorted(result) == ["at_start", "inside"]

    def test_sentinel_range(self, source):
        result = source.scan("places", "g", "9q8yy", "9q8yy~")
        assert sorted(result) == ["at_end", "at_start", "inside"]

    def test_unknown_path(self, source):
        assert source.scan("other", "g", "0", "~") == {}

    def test_returns_records(self, source):
        assert source.scan("places", "g", "dr", "dr~") == {"far": {"g": "dr5regw3p"}}

    def test_initial_data(self):
        src = InMemorySource({"places": {"a": {"g": "9q"}}})
        assert src.get("places", "a") == {"g": "9q"}

    def test_set_rejects_non_dict(self, source):
        with pytest.raises(DataSourceError):
            source.set("places", "bad", "9q8yyk")

    def test_remove(self, source):
        source.remove("places", "inside")
        source.remove("places", "missing")
        assert source.get("places", "inside") is None


class TestInMemoryWatch:
    """Tests for InMemorySource.watch."""

    def test_initial_snapshot(self, source):
        updates = []
        source.watch("places", "g", "9q8yyh", "9q8yys", updates.append)
        assert len(updates) == 1
        assert sorted(updates[0]) == ["at_start", "inside"]

    def test_update_in_range(self, source):
        updates = []
        source.watch("places", "g", "9q8yyh", "9q8yys", updates.append)
        source.set("places", "new", {"g": "9q8yym"})

        assert len(updates) == 2
        assert "new" in updates[-1]

    def test_update_out_of_range_is_silent(self, source):
        updates = []
        source.watch("places", "g", "9q8yyh", "9q8yys", updates.append)
        source.set("places", "elsewhere", {"g": "u4pruydqq"})
        assert len(updates) == 1

    def test_move_out_of_range(self, source):
        updates = []
        source.watch("places", "g", "9q8yyh", "9q8yys", updates.append)
        source.set("places", "inside", {"g": "u4pruydqq"})

        assert len(updates) == 2
        assert "inside" not in updates[-1]

    def test_remove_notifies(self, source):
        updates = []
        source.watch("places", "g", "9q8yyh", "9q8yys", updates.append)
        source.remove("places", "inside")
        assert sorted(updates[-1]) == ["at_start"]

    def test_cancel(self, source):
        updates = []
        subscription = source.watch("places", "g", "9q8yyh", "9q8yys", updates.append)
        assert subscription.active

        subscription.cancel()
        subscription.cancel()
        source.set("places", "new", {"g": "9q8yym"})

        assert not subscription.active
        assert len(updates) == 1

    def test_failing_initial_callback_unregisters(self, source):
        def callback(value):
            raise RuntimeError("callback failed")

        with pytest.raises(RuntimeError):
            source.watch("places", "g", "9q8yyh", "9q8yys", callback)

        assert not source._watches

    def test_other_path_is_silent(self, source):
        updates = []
        source.watch("places", "g", "9q8yyh", "9q8yys", updates.append)
        source.set("people", "new", {"g": "9q8yym"})
        assert len(updates) == 1


class TestSubscription:
    """Tests for Subscription."""

    def test_on_cancel_runs_once(self):
        calls = []
        subscription = Subscription(on_cancel=lambda: calls.append(1))
        subscription.cancel()
        subscription.cancel()
        assert calls == [1]


@pytest.fixture
def frame():
    return pd.DataFrame({
        "key": ["ferry_building", "oakland", "nyc"],
        "g": ["9q8znf4x5e", "9q9p3yyx4p", "dr5regw3pg"],
        "latitude": [37.7955, 37.8044, 40.7128],
        "longitude": [-122.3937, -122.2712, -74.0060],
    })


class TestDataFrameSource:
    """Tests for DataFrameSource."""

    def test_scan(self, frame):
        src = DataFrameSource(frame)
        result = src.scan("ignored", "g", "9q8z", "9q8z~")

        assert list(result) == ["ferry_building"]
        assert result["ferry_building"]["latitude"] == pytest.approx(37.7955)
        assert "key" not in result["ferry_building"]

    def test_scan_empty(self, frame):
        assert DataFrameSource(frame).scan("places", "g", "0", "1") == {}

    def test_missing_key_column(self, frame):
        with pytest.raises(DataLoadError):
            DataFrameSource(frame, key_column="id")

    def test_missing_order_column(self, frame):
        with pytest.raises(DataSourceError):
            DataFrameSource(frame).scan("places", "geohash", "0", "~")

    def test_watch_not_supported(self, frame):
        src = DataFrameSource(frame)
        assert isinstance(src, RangeScanSource)
        with pytest.raises(SubscriptionNotSupportedError):
            src.watch("places", "g", "0", "~", lambda value: None)

    def test_from_csv(self, frame, tmp_path):
        csv_path = tmp_path / "places.csv"
        frame.to_csv(csv_path, index=False)

        src = DataFrameSource.from_csv(csv_path)
        assert sorted(src.scan("places", "g", "9q", "9q~")) == ["ferry_building", "oakland"]

    def test_from_csv_keeps_numeric_geohash_as_text(self, tmp_path):
        csv_path = tmp_path / "places.csv"
        csv_path.write_text("key,g\n1,0123\n2,7zzz\n")

        src = DataFrameSource.from_csv(csv_path)
        assert src.scan("places", "g", "01", "02") == {"1": {"g": "0123"}}

    def test_from_csv_missing_file(self, tmp_path):
        with pytest.raises(DataLoadError):
            DataFrameSource.from_csv(tmp_path / "missing.csv")

    def test_from_csv_empty_file(self, tmp_path):
        csv_path = tmp_path / "empty.csv"
        csv_path.write_text("")
        with pytest.raises(DataLoadError):
            DataFrameSource.from_csv(csv_path)
