"""
Image Deduplicator

This module downloads the tile image of every candidate release and keeps only
the releases whose image differs from the previously kept one, so that the
result lists each visually distinct version of the tile once.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from .change_detection_models import Candidate, ImageFetchOutcome, ImageSample
from ..connection import WaybackHttpClient
from ..exceptions import ImageFetchError, WaybackConnectionError, QueryCancelledError
from ..utils import get_logger, are_bytes_equal, CancellationToken, check_cancelled

logger = get_logger(__name__)


class ImageDeduplicator:
    """Collapses candidate releases with byte-identical tile images.

    Downloads run concurrently on a bounded thread pool; the results are then
    compared in a fixed oldest-to-newest order, so the output does not depend
    on which download finishes first.
    """

    def __init__(self, http_client: WaybackHttpClient,
                 max_workers: int = 8,
                 strict: bool = True):
        """Initialize the deduplicator.

        Args:
            http_client: Client used for the tile image downloads
            max_workers: Maximum number of concurrent downloads
            strict: If True any failed download raises ImageFetchError; if
                False failed candidates are dropped and the rest is processed,
                unless every download failed
        """
        self.http_client = http_client
        self.max_workers = max_workers
        self.strict = strict

    def remove_duplicates(self, candidates: Sequence[Candidate],
                          cancellation_token: Optional[CancellationToken] = None) -> List[int]:
        """Release numbers of the distinct tile images, oldest first.

        Args:
            candidates: Candidates ordered newest first, as produced by the change detector
            cancellation_token: Checked before the downloads, by every pending
                download and once all downloads are done

        Returns:
            Release numbers whose image differs from the preceding kept image

        Raises:
            ImageFetchError: In strict mode if any download failed, otherwise if all failed
            QueryCancelledError: If the token is cancelled
        """
        if not candidates:
            return []

        check_cancelled(cancellation_token, "image_fetch")

        # oldest first: an image is new relative to what came before it in time
        ascending = list(reversed(candidates))
        outcomes = self._fetch_all(ascending, cancellation_token)

        check_cancelled(cancellation_token, "image_fetch")

        failed = [outcome for outcome in outcomes if not outcome.ok]
        if failed:
            failed_releases = [outcome.release_number for outcome in failed]
            if self.strict:
                logger.error(f"Failed to fetch tile images for releases {failed_releases}")
                raise ImageFetchError(
                    f"Failed to fetch {len(failed)} of {len(outcomes)} tile images",
                    {"release_numbers": failed_releases}
                )
            if len(failed) == len(outcomes):
                logger.error(f"No tile image could be fetched for releases {failed_releases}")
                raise ImageFetchError(
                    f"Failed to fetch all {len(outcomes)} tile images",
                    {"release_numbers": failed_releases}
                )
            logger.warning(f"Skipping releases with failed tile image downloads: {failed_releases}")

        unique_samples: List[ImageSample] = []

        for outcome in outcomes:
            if not outcome.ok:
                continue

            current = outcome.sample
            previous = unique_samples[-1] if unique_samples else None

            if previous is not None and are_bytes_equal(previous.data, current.data):
                continue

            unique_samples.append(current)

        kept = [sample.release_number for sample in unique_samples]
        logger.debug(f"Kept {len(kept)} of {len(candidates)} candidate releases: {kept}")
        return kept

    def _fetch_all(self, candidates: List[Candidate],
                   cancellation_token: Optional[CancellationToken]) -> List[ImageFetchOutcome]:
        workers = max(1, min(self.max_workers, len(candidates)))

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(self._fetch_image, candidate, cancellation_token)
                for candidate in candidates
            ]
            # submission order, not completion order
            return [future.result() for future in futures]

    def _fetch_image(self, candidate: Candidate,
                     cancellation_token: Optional[CancellationToken]) -> ImageFetchOutcome:
        try:
            check_cancelled(cancellation_token, "image_fetch")
        except QueryCancelledError as e:
            return ImageFetchOutcome(
                release_number=candidate.release_number,
                error=ImageFetchError("Download skipped after cancellation",
                                      {"release_number": candidate.release_number, **e.context})
            )

        try:
            data = self.http_client.get_bytes(candidate.url)
        except WaybackConnectionError as e:
            logger.debug(f"Tile image download failed for release {candidate.release_number}: {e}")
            return ImageFetchOutcome(
                release_number=candidate.release_number,
                error=ImageFetchError(
                    "Failed to fetch tile image",
                    {"release_number": candidate.release_number, **e.context}
                )
            )

        return ImageFetchOutcome(
            release_number=candidate.release_number,
            sample=ImageSample(release_number=candidate.release_number, data=data)
        )
