"""
Module-level entry points backed by a lazily created default service.

The default service is built on first use from the production settings (or
from ``$WAYBACK_ENVIRONMENT``) plus any overrides given to
``set_custom_wayback_config``. Changing the overrides discards the default
service, and with it the cached timeline.
"""

import threading
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .change_detection import GeoPoint
from .config import ConfigLoader
from .local_changes import LocalChangesService
from .releases import ReleaseRecord
from .utils import get_logger, CancellationToken

logger = get_logger(__name__)

_lock = threading.Lock()
_default_service: Optional[LocalChangesService] = None
_custom_overrides: Dict[str, Any] = {}


def set_custom_wayback_config(sub_domains: Optional[List[str]] = None,
                              config_file_url: Optional[str] = None,
                              config_data: Optional[Dict[str, Any]] = None) -> None:
    """
    Override the wayback service settings used by the module-level functions.

    Args:
        sub_domains: Subdomains to use instead of the environment defaults
        config_file_url: Configuration file URL to use instead of the default
        config_data: Configuration document to use instead of downloading one
    """
    global _default_service

    with _lock:
        _custom_overrides.clear()
        _custom_overrides.update({
            "custom_sub_domains": sub_domains or None,
            "custom_config_file_url": config_file_url or None,
            "config_data": config_data or None,
        })
        _default_service = None

    logger.info("Custom wayback configuration updated")


def get_default_service() -> LocalChangesService:
    """The shared service, created on first call."""
    global _default_service

    with _lock:
        if _default_service is None:
            settings = ConfigLoader().get_settings(**_custom_overrides)
            _default_service = LocalChangesService.from_settings(settings)
        return _default_service


def resolve_changed_releases(point: Union[GeoPoint, Mapping[str, float]], zoom: float,
                             cancellation_token: Optional[CancellationToken] = None
                             ) -> List[ReleaseRecord]:
    """Releases with a visibly different tile image at a point, oldest first."""
    return get_default_service().resolve_changed_releases(point, zoom, cancellation_token)


def get_timeline() -> Tuple[ReleaseRecord, ...]:
    """All releases, newest first."""
    return get_default_service().release_index.get_timeline()


def get_by_release_number(release_number: int) -> Optional[ReleaseRecord]:
    return get_default_service().release_index.get_by_release_number(release_number)


def get_metadata(point: Union[GeoPoint, Mapping[str, float]], zoom: int, release_number: int):
    """Imagery metadata at a point for one release (see MetadataQueryService)."""
    from .metadata import MetadataQueryService

    service = MetadataQueryService(get_default_service().release_index)
    return service.get_metadata(point, zoom, release_number)


def get_wayback_sub_domains() -> List[str]:
    return get_default_service().settings.get_sub_domains()


def get_wayback_service_base_url() -> str:
    return get_default_service().settings.get_service_base_url()


def get_config_file_url() -> str:
    return get_default_service().settings.get_config_file_url()


def get_tile_image_url(url_template: str, level: int, row: int, column: int) -> str:
    """Tile image URL of one release template (see WaybackSettings.get_tile_image_url)."""
    return get_default_service().settings.get_tile_image_url(url_template, level, row, column)
