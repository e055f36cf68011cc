"""Change Detection System for World Imagery Wayback tiles

This module finds the wayback releases in which a tile's imagery actually
changed: the tilemap endpoint gives the candidate releases, and a byte-exact
comparison of the downloaded tile images removes candidates whose image did
not change.

Components:
- GeoPoint, TileCoordinate: Query location and the tile it falls in
- TilemapResponse: Parsed change signal of one tilemap request
- Candidate, ImageSample, ImageFetchOutcome: Per-release download records
- TileChangeDetector: Backward walk over the timeline using tilemap requests
- ImageDeduplicator: Collapses releases with identical tile images

Usage:
    from wayback_core.change_detection import (
        TileChangeDetector, ImageDeduplicator, TileCoordinate
    )

    tile = TileCoordinate.from_point(-100.05, 35.10, 14)
    release_numbers = TileChangeDetector(index, client, settings).find_changed_releases(tile)
"""

from .change_detection_models import (
    GeoPoint, TileCoordinate, TilemapResponse, Candidate, ImageSample, ImageFetchOutcome
)
from .tile_change_detector import TileChangeDetector
from .image_deduplicator import ImageDeduplicator

__all__ = [
    'GeoPoint', 'TileCoordinate', 'TilemapResponse', 'Candidate', 'ImageSample',
    'ImageFetchOutcome', 'TileChangeDetector', 'ImageDeduplicator'
]
