"""
Tests for geohash encoding and decoding.
"""
import random
import pytest
from shapely.geometry import Point
from geoquery.core.geohash import (
    encode,
    encode_geohash,
    decode,
    get_box_bounds,
    geohash_polygon,
    geohash_bits,
)
from geoquery.core.math_utils import BASE32, GEOHASH_PRECISION
from geoquery.utils.exceptions import (
    InvalidGeohashError,
    InvalidLocationError,
    InvalidPrecisionError,
)


class TestEncode:
    """Tests for encode."""

    def test_san_francisco(self):
        assert encode(37.7749, -122.4194, precision=6) == "9q8yyk"

    def test_known_wikipedia_example(self):
        assert encode(42.6, -5.6, precision=5) == "ezs42"

    def test_default_precision(self):
        assert len(encode(37.7749, -122.4194)) == GEOHASH_PRECISION

    def test_length_matches_precision(self):
        rng = random.Random(7)
        for _ in range(50):
            lat = rng.uniform(-90, 90)
            lon = rng.uniform(-180, 180)
            for precision in range(1, 23):
                geohash = encode(lat, lon, precision)
                assert len(geohash) == precision
                assert set(geohash) <= set(BASE32)

    def test_prefix_stable_across_precision(self):
        assert encode(51.5074, -0.1278, 12).startswith(encode(51.5074, -0.1278, 5))

    def test_midpoint_goes_low(self):
        """A value equal to the interval midpoint takes the 0 bit."""
        assert encode(0.0, 0.0, 5) == "00000"

    def test_extremes(self):
        assert encode(90, 180, 3) == "zzz"
        assert encode(-90, -180, 2) == "00"

    def test_deterministic(self):
        assert encode(-33.8688, 151.2093, 9) == encode(-33.8688, 151.2093, 9)

    def test_encode_geohash_pair(self):
        assert encode_geohash([37.7749, -122.4194], 6) == "9q8yyk"
        assert encode_geohash((37.7749, -122.4194), 6) == "9q8yyk"

    @pytest.mark.parametrize("lat,lon", [(91, 0), (-90.5, 0), (0, 181), (0, -180.1)])
    def test_invalid_location(self, lat, lon):
        with pytest.raises(InvalidLocationError):
            encode(lat, lon, 5)

    @pytest.mark.parametrize("precision", [0, -1, 23, 2.5, True, "5"])
    def test_invalid_precision(self, precision):
        with pytest.raises(InvalidPrecisionError):
            encode(10, 10, precision)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            encode(100, 0, 5)


class TestDecode:
    """Tests for decode and cell bounds."""

    def test_wikipedia_example(self):
        lat, lon = decode("ezs42")
        assert lat == pytest.approx(42.605, abs=0.03)
        assert lon == pytest.approx(-5.603, abs=0.03)

    def test_decode_near_original(self):
        lat, lon = decode(encode(53.3498, -6.2603, 10))
        assert lat == pytest.approx(53.3498, abs=1e-4)
        assert lon == pytest.approx(-6.2603, abs=1e-4)

    def test_invalid_character(self):
        with pytest.raises(InvalidGeohashError):
            decode("9q8ya")

    def test_empty(self):
        with pytest.raises(InvalidGeohashError):
            decode("")

    def test_box_bounds_contain_point(self):
        min_lat, max_lat, min_lon, max_lon = get_box_bounds("9q8yyk")
        assert min_lat <= 37.7749 <= max_lat
        assert min_lon <= -122.4194 <= max_lon

    def test_box_bounds_first_bit(self):
        assert get_box_bounds("s", bits=1) == (-90.0, 90.0, 0.0, 180.0)

    def test_box_bounds_bits_capped_at_length(self):
        assert get_box_bounds("9q", bits=50) == get_box_bounds("9q")

    def test_box_bounds_invalid_bits(self):
        with pytest.raises(InvalidPrecisionError):
            get_box_bounds("9q", bits=0)

    def test_polygon_contains_point(self):
        poly = geohash_polygon("9q8yyk")
        assert poly.contains(Point(-122.4194, 37.7749))
        assert poly.area > 0

    def test_coarser_polygon_contains_finer(self):
        assert geohash_polygon("9q8yyk", bits=27).covers(geohash_polygon("9q8yyk"))


class TestGeohashBits:
    """Tests for geohash_bits."""

    def test_bits(self):
        assert geohash_bits("9q") == "0100110110"

    def test_length(self):
        assert len(geohash_bits("9q8yyk")) == 30
