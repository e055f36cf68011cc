"""
Slippy-map tile math.

Conversions between WGS84 longitude/latitude and Web Mercator tile indices
(256px tiles, origin at the top-left corner of the world).
"""

import math

# Web Mercator latitude limit
MAX_LATITUDE = 85.0511287798


def long2tile(lon: float, zoom: int) -> int:
    """Column of the tile containing ``lon`` at ``zoom``."""
    return int(math.floor((lon + 180.0) / 360.0 * (2 ** zoom)))


def lat2tile(lat: float, zoom: int) -> int:
    """Row of the tile containing ``lat`` at ``zoom``."""
    lat_rad = math.radians(max(min(lat, MAX_LATITUDE), -MAX_LATITUDE))
    y = (1.0 - math.log(math.tan(lat_rad) + 1.0 / math.cos(lat_rad)) / math.pi) / 2.0
    return int(math.floor(y * (2 ** zoom)))


def tile2long(x: int, zoom: int) -> float:
    """Longitude of the left edge of tile column ``x``."""
    return x / (2 ** zoom) * 360.0 - 180.0


def tile2lat(y: int, zoom: int) -> float:
    """Latitude of the top edge of tile row ``y``."""
    n = math.pi - 2.0 * math.pi * y / (2 ** zoom)
    return math.degrees(math.atan(math.sinh(n)))


def zoom_to_level(zoom: float) -> int:
    """Round a (possibly fractional) map zoom to the integer tile level."""
    # half-up, not banker's rounding
    return int(math.floor(zoom + 0.5))
