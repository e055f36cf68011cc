"""
World Imagery Wayback Core Package

This package finds the World Imagery Wayback releases in which the imagery at
a location changed, and provides the release index, tile math, URL helpers and
metadata queries it is built on.
"""

from .releases import ReleaseIndex, ReleaseRecord
from .local_changes import LocalChangesService
from .api import (
    set_custom_wayback_config,
    resolve_changed_releases,
    get_timeline,
    get_by_release_number,
    get_metadata,
    get_wayback_sub_domains,
    get_wayback_service_base_url,
    get_config_file_url,
    get_tile_image_url,
)
from .utils import long2tile, lat2tile, tile2long, tile2lat, CancellationToken

__version__ = "1.0.0"
__all__ = [
    'ReleaseIndex', 'ReleaseRecord', 'LocalChangesService', 'CancellationToken',
    'set_custom_wayback_config', 'resolve_changed_releases', 'get_timeline',
    'get_by_release_number', 'get_metadata', 'get_wayback_sub_domains',
    'get_wayback_service_base_url', 'get_config_file_url', 'get_tile_image_url',
    'long2tile', 'lat2tile', 'tile2long', 'tile2lat',
]
