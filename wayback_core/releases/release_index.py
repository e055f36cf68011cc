"""
Release Index

This module turns the World Imagery Wayback configuration document (keyed by
release number) into an ordered timeline and answers lookups against it:
release by number, and the release that came immediately before a given one.

The index is an explicitly constructed object that is passed to every
collaborator. The configuration, the timeline and both lookup maps are built
lazily on first use behind one lock and are read-only afterwards.
"""

import threading
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from .release_models import ReleaseRecord, is_valid_release_entry
from ..config import WaybackSettings
from ..connection import WaybackHttpClient
from ..exceptions import ConfigFetchError, WaybackConnectionError
from ..utils import get_logger

logger = get_logger(__name__)


class ReleaseIndex:
    """Chronological index of all World Imagery Wayback releases.

    The timeline is sorted by release date, newest first. "Previous release"
    therefore means the next older entry of the timeline, which is not
    necessarily the numerically adjacent release number.
    """

    def __init__(self, http_client: WaybackHttpClient,
                 settings: WaybackSettings,
                 config_data: Optional[Dict[str, Any]] = None):
        """Initialize the index.

        Args:
            http_client: Client used to download the configuration document
            settings: Service settings providing the configuration file URL
            config_data: Pre-supplied configuration document; skips the download
        """
        self.http_client = http_client
        self.settings = settings
        self._lock = threading.RLock()
        self._config: Optional[Dict[str, Any]] = (
            config_data if config_data is not None else settings.config_data
        )
        self._timeline: Optional[Tuple[ReleaseRecord, ...]] = None
        self._by_release_number: Optional[Dict[int, ReleaseRecord]] = None
        self._position_by_release_number: Optional[Dict[int, int]] = None

    def load_configuration(self) -> Dict[str, Any]:
        """Return the wayback configuration, downloading it on first use.

        Returns:
            Configuration document keyed by release number

        Raises:
            ConfigFetchError: If the download fails or the body is not a JSON object
        """
        with self._lock:
            if self._config is not None:
                return self._config

            url = self.settings.get_config_file_url()
            logger.info(f"Fetching wayback configuration from {url}")

            try:
                config = self.http_client.get_json(url)
            except WaybackConnectionError as e:
                raise ConfigFetchError(
                    "Failed to fetch wayback config file",
                    {"url": url, **e.context}
                ) from e

            if not isinstance(config, dict):
                raise ConfigFetchError(
                    "Wayback config file is not a JSON object",
                    {"url": url, "type": type(config).__name__}
                )

            self._config = config
            return self._config

    def get_timeline(self) -> Tuple[ReleaseRecord, ...]:
        """All releases sorted by release date, newest first.

        Entries with a non-numeric key or missing required fields are skipped.
        Releases without a parseable date get timestamp 0 and end up last.
        """
        if self._timeline is not None:
            return self._timeline

        with self._lock:
            if self._timeline is not None:
                return self._timeline

            config = self.load_configuration()
            records = []

            for key, entry in config.items():
                try:
                    release_num = int(key)
                except (TypeError, ValueError):
                    logger.debug(f"Skipping configuration key that is not a release number: {key!r}")
                    continue

                if not is_valid_release_entry(entry):
                    logger.debug(f"Skipping invalid configuration entry for release {release_num}")
                    continue

                try:
                    records.append(ReleaseRecord.from_config_entry(release_num, entry))
                except ValidationError as e:
                    logger.debug(f"Skipping configuration entry for release {release_num}: {e.error_count()} bad field(s)")
                    continue

            # stable: undated releases keep configuration order among themselves
            records.sort(key=lambda record: record.release_datetime, reverse=True)

            undated = sum(1 for record in records if record.release_datetime == 0)
            if undated:
                logger.warning(f"{undated} release(s) have no parseable date in their title")

            self._timeline = tuple(records)
            logger.info(f"Built wayback timeline with {len(records)} releases")
            return self._timeline

    def get_by_release_number(self, release_number: int) -> Optional[ReleaseRecord]:
        """Release record for a release number, or None when unknown."""
        if self._by_release_number is None:
            with self._lock:
                if self._by_release_number is None:
                    self._by_release_number = {
                        record.release_num: record for record in self.get_timeline()
                    }

        return self._by_release_number.get(release_number)

    def get_previous_release_number(self, release_number: int) -> Optional[int]:
        """Release number of the release published immediately before ``release_number``.

        Returns:
            The next older release number, or None when ``release_number`` is
            unknown or already the oldest release
        """
        timeline = self.get_timeline()

        if self._position_by_release_number is None:
            with self._lock:
                if self._position_by_release_number is None:
                    self._position_by_release_number = {
                        record.release_num: index for index, record in enumerate(timeline)
                    }

        index = self._position_by_release_number.get(release_number)
        if index is None or index + 1 >= len(timeline):
            return None

        return timeline[index + 1].release_num

    def get_latest_release(self) -> ReleaseRecord:
        """The newest release.

        Raises:
            ConfigFetchError: If the configuration holds no usable release
        """
        timeline = self.get_timeline()
        if not timeline:
            raise ConfigFetchError("Wayback configuration contains no valid releases")
        return timeline[0]

    def __len__(self) -> int:
        return len(self.get_timeline())
