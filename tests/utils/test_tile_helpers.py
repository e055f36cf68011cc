"""
Unit tests for the slippy-map tile math.
"""

import pytest

from wayback_core.utils import long2tile, lat2tile, tile2long, tile2lat, zoom_to_level
from wayback_core.utils.geometry import MAX_LATITUDE


class TestTileMath:
    """Test suite for the slippy-map conversions."""

    def test_origin_tile(self):
        """Test the top-left corner of the world maps to tile 0/0."""
        assert long2tile(-180.0, 5) == 0
        assert lat2tile(85.0, 5) == 0

    def test_level_zero_single_tile(self):
        """Test every point falls in the only tile at level 0."""
        assert long2tile(12.5, 0) == 0
        assert lat2tile(-33.9, 0) == 0

    def test_known_location(self):
        """Test a known location at level 14."""
        # Esri campus, Redlands CA
        assert long2tile(-117.1956, 14) == 2858
        assert lat2tile(34.0564, 14) == 6541

    def test_equator_and_prime_meridian(self):
        """Test the center of the map lands on the middle tile boundary."""
        assert long2tile(0.0, 1) == 1
        assert lat2tile(0.0, 1) == 1

    def test_round_trip_tile_edges(self):
        """Test tile edge coordinates convert back to the same tile."""
        zoom = 12
        x, y = 655, 1583

        assert long2tile(tile2long(x, zoom) + 1e-9, zoom) == x
        assert lat2tile(tile2lat(y, zoom) - 1e-9, zoom) == y

    def test_tile2long_and_tile2lat_bounds(self):
        """Test the world edges."""
        assert tile2long(0, 3) == -180.0
        assert tile2long(8, 3) == 180.0
        assert tile2lat(0, 3) == pytest.approx(MAX_LATITUDE, abs=1e-6)

    def test_lat2tile_clamps_poles(self):
        """Test latitudes beyond the Web Mercator limit do not fail."""
        assert lat2tile(90.0, 4) == 0
        assert lat2tile(-90.0, 4) in (15, 16)

    @pytest.mark.parametrize("zoom,expected", [
        (14, 14), (14.4, 14), (14.5, 15), (13.5, 14), (0.49, 0),
    ])
    def test_zoom_to_level_rounds_half_up(self, zoom, expected):
        """Test fractional zooms round half up to the tile level."""
        assert zoom_to_level(zoom) == expected
