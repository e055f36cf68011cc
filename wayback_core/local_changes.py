"""
Local changes query

Resolves, for a point and zoom level, the wayback releases in which the tile
under that point visibly changed:

1. derive the tile coordinate from the point,
2. walk the timeline backwards with tilemap requests (TileChangeDetector),
3. download the candidates' tile images and drop identical ones (ImageDeduplicator),
4. return the matching release records, oldest first.
"""

from typing import List, Mapping, Optional, Union

from .change_detection import (
    Candidate, GeoPoint, ImageDeduplicator, TileChangeDetector, TileCoordinate
)
from .config import WaybackSettings
from .connection import WaybackHttpClient
from .releases import ReleaseIndex, ReleaseRecord
from .utils import get_logger, log_performance, CancellationToken, check_cancelled

logger = get_logger(__name__)


class LocalChangesService:
    """Query facade over the release index, change detector and deduplicator."""

    def __init__(self, release_index: ReleaseIndex,
                 http_client: WaybackHttpClient,
                 settings: WaybackSettings,
                 change_detector: Optional[TileChangeDetector] = None,
                 deduplicator: Optional[ImageDeduplicator] = None):
        """
        Initialize the service.

        Args:
            release_index: Timeline shared by every query of this service
            http_client: Client for the tilemap and tile image requests
            settings: Service settings (URLs, worker count, failure policy)
            change_detector: Optional detector replacing the default one
            deduplicator: Optional deduplicator replacing the default one
        """
        self.release_index = release_index
        self.http_client = http_client
        self.settings = settings
        self.change_detector = change_detector or TileChangeDetector(
            release_index, http_client, settings
        )
        self.deduplicator = deduplicator or ImageDeduplicator(
            http_client,
            max_workers=settings.max_image_fetch_workers,
            strict=settings.strict_image_fetch,
        )

    @classmethod
    def from_settings(cls, settings: WaybackSettings) -> "LocalChangesService":
        """Build a service with its own HTTP client and release index."""
        http_client = WaybackHttpClient(timeout=settings.request_timeout_seconds)
        return cls(ReleaseIndex(http_client, settings), http_client, settings)

    @log_performance
    def resolve_changed_releases(self, point: Union[GeoPoint, Mapping[str, float]],
                                 zoom: float,
                                 cancellation_token: Optional[CancellationToken] = None
                                 ) -> List[ReleaseRecord]:
        """
        Releases with a visibly different tile image at a point, oldest first.

        Args:
            point: Location with longitude and latitude
            zoom: Map zoom level; rounded to the nearest tile level
            cancellation_token: Optional token; cancelling stops the query at
                the next network round trip

        Returns:
            Release records in ascending chronological order, one per distinct image

        Raises:
            ConfigFetchError: If the wayback configuration cannot be loaded
            ChangeProbeError: If a tilemap request fails
            ImageFetchError: If tile images cannot be downloaded (strict mode)
            QueryCancelledError: If the query was cancelled
        """
        geo_point = point if isinstance(point, GeoPoint) else GeoPoint(**point)
        tile = TileCoordinate.from_point(geo_point.longitude, geo_point.latitude, zoom)
        logger.info(f"Resolving local changes at {geo_point.longitude},{geo_point.latitude} (tile {tile})")

        release_numbers = self.change_detector.find_changed_releases(tile, cancellation_token)

        candidates = [
            Candidate(
                release_number=release_number,
                url=self.settings.get_tile_image_url(
                    self.release_index.get_by_release_number(release_number).item_url,
                    tile.level, tile.row, tile.column,
                ),
            )
            for release_number in release_numbers
        ]

        unique_release_numbers = self.deduplicator.remove_duplicates(candidates, cancellation_token)

        check_cancelled(cancellation_token, "hydrate")

        releases = [
            self.release_index.get_by_release_number(release_number)
            for release_number in unique_release_numbers
        ]

        logger.info(
            f"Tile {tile}: {len(releases)} distinct release(s) out of "
            f"{len(release_numbers)} with change signals"
        )
        return releases
