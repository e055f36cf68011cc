"""
Tile Change Detector

This module walks the wayback timeline backwards for one tile and collects the
releases in which the tile changed, using the ``tilemap`` endpoint of the
wayback map service as the change signal.

Each tilemap response says whether the tile changed at the probed release
(``data[0]``) and, if so, in which release that change was made
(``select[0]``). The next probe goes to the release immediately before that
one, so a long history is covered with one request per distinct change.
"""

from typing import List, Optional

from pydantic import ValidationError

from .change_detection_models import TileCoordinate, TilemapResponse
from ..config import WaybackSettings
from ..connection import WaybackHttpClient
from ..exceptions import ChangeProbeError, WaybackConnectionError
from ..releases import ReleaseIndex
from ..utils import get_logger, CancellationToken, check_cancelled

logger = get_logger(__name__)


class TileChangeDetector:
    """Finds the releases with local changes for a tile.

    Probes are strictly sequential since each one depends on the previous
    response. Any failed probe aborts the whole walk.
    """

    def __init__(self, release_index: ReleaseIndex,
                 http_client: WaybackHttpClient,
                 settings: WaybackSettings):
        """Initialize the change detector.

        Args:
            release_index: Timeline used for the newest and previous release lookups
            http_client: Client used for the tilemap requests
            settings: Service settings providing the map service base URL
        """
        self.release_index = release_index
        self.http_client = http_client
        self.settings = settings

    def find_changed_releases(self, tile: TileCoordinate,
                              cancellation_token: Optional[CancellationToken] = None) -> List[int]:
        """Release numbers with a change at ``tile``, newest first.

        Args:
            tile: Tile to inspect
            cancellation_token: Checked before every tilemap request

        Returns:
            Release numbers, newest first; empty when the newest release shows no change

        Raises:
            ChangeProbeError: If any tilemap request fails or cannot be parsed
            QueryCancelledError: If the token is cancelled during the walk
        """
        base_url = self.settings.get_service_base_url()
        release_number: Optional[int] = self.release_index.get_latest_release().release_num
        results: List[int] = []

        while release_number is not None:
            check_cancelled(cancellation_token, "tilemap")

            tilemap = self._request_tilemap(base_url, release_number, tile)

            if not tilemap.has_change:
                break

            effective_release = tilemap.effective_release(release_number)

            if self.release_index.get_by_release_number(effective_release) is None:
                logger.warning(
                    f"Tilemap for release {release_number} points to unknown release "
                    f"{effective_release}, stopping walk at tile {tile}"
                )
                break

            if effective_release in results:
                logger.warning(f"Tilemap walk revisited release {effective_release} at tile {tile}, stopping")
                break

            results.append(effective_release)
            release_number = self.release_index.get_previous_release_number(effective_release)

        logger.debug(f"Found {len(results)} release(s) with local changes at tile {tile}: {results}")
        return results

    def _request_tilemap(self, base_url: str, release_number: int,
                         tile: TileCoordinate) -> TilemapResponse:
        url = f"{base_url}/tilemap/{release_number}/{tile.level}/{tile.row}/{tile.column}"

        try:
            payload = self.http_client.get_json(url)
        except WaybackConnectionError as e:
            logger.error(f"Tilemap request failed for release {release_number}: {e}")
            raise ChangeProbeError(
                "Tilemap request failed",
                {"release_number": release_number, "tile": str(tile), **e.context}
            ) from e

        # ArcGIS reports service errors as HTTP 200 with an "error" body
        if isinstance(payload, dict) and "error" in payload:
            error = payload["error"] if isinstance(payload["error"], dict) else {}
            logger.error(f"Tilemap service error for release {release_number}: {payload['error']}")
            raise ChangeProbeError(
                f"Tilemap service error: {error.get('message', 'unknown error')}",
                {"release_number": release_number, "tile": str(tile), "url": url,
                 "status_code": error.get("code")}
            )

        try:
            return TilemapResponse.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Unexpected tilemap response for release {release_number}: {e}")
            raise ChangeProbeError(
                "Tilemap response could not be parsed",
                {"release_number": release_number, "tile": str(tile), "url": url}
            ) from e
