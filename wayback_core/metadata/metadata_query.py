"""
Metadata query for World Imagery Wayback tiles.

Every wayback release has a metadata map service whose sublayers describe the
imagery (acquisition date, provider, resolution, accuracy) shown at a tile
level. This module queries the sublayer matching a zoom level at a point.
"""

from typing import Callable, Optional, Union, Mapping

from arcgis.features import FeatureLayer
from arcgis.geometry import Point
from arcgis.geometry.filters import intersects

from .metadata_models import (
    ReleaseMetadata, METADATA_FIELD_NAMES, MAX_ZOOM, MIN_ZOOM,
    SOURCE_DATE, SOURCE_PROVIDER, SOURCE_NAME, RESOLUTION, ACCURACY
)
from ..change_detection import GeoPoint
from ..exceptions import MetadataQueryError
from ..releases import ReleaseIndex
from ..utils import get_logger

logger = get_logger(__name__)

WGS84_WKID = 4326


def get_layer_id(zoom: int) -> int:
    """Metadata sublayer for a tile level; levels below 10 share the level 10 sublayer."""
    return min(MAX_ZOOM - int(zoom), MAX_ZOOM - MIN_ZOOM)


class MetadataQueryService:
    """Queries the metadata map services of wayback releases."""

    def __init__(self, release_index: ReleaseIndex,
                 gis=None,
                 layer_factory: Callable[..., FeatureLayer] = FeatureLayer):
        """
        Initialize the metadata query service.

        Args:
            release_index: Index used to find the metadata service of a release
            gis: Optional arcgis GIS connection; anonymous access is used when None
            layer_factory: Callable building a feature layer from a URL
        """
        self.release_index = release_index
        self.gis = gis
        self.layer_factory = layer_factory

    def get_metadata(self, point: Union[GeoPoint, Mapping[str, float]],
                     zoom: int, release_number: int) -> Optional[ReleaseMetadata]:
        """
        Metadata of the imagery at a point for one release.

        Args:
            point: Location with longitude and latitude
            zoom: Map zoom level
            release_number: Wayback release number

        Returns:
            ReleaseMetadata, or None when no metadata feature covers the point

        Raises:
            ValueError: If a required argument is missing
            MetadataQueryError: If the release is unknown or the query fails
        """
        if not point or not zoom or not release_number:
            raise ValueError("Failed to query metadata because the required parameters are missing")

        geo_point = point if isinstance(point, GeoPoint) else GeoPoint(**point)

        release = self.release_index.get_by_release_number(release_number)
        if release is None:
            raise MetadataQueryError(
                "Failed to find wayback release",
                {"release_number": release_number}
            )

        layer_url = f"{release.metadata_layer_url}/{get_layer_id(zoom)}"

        try:
            layer = self.layer_factory(layer_url, gis=self.gis)
            feature_set = layer.query(
                where="1=1",
                out_fields=",".join(METADATA_FIELD_NAMES),
                geometry_filter=intersects(Point({
                    "x": geo_point.longitude,
                    "y": geo_point.latitude,
                    "spatialReference": {"wkid": WGS84_WKID},
                })),
                return_geometry=False,
            )
        except Exception as e:
            error_msg = f"Failed to query metadata for release {release_number}: {str(e)}"
            logger.error(error_msg)
            raise MetadataQueryError(error_msg, {"url": layer_url}) from e

        features = feature_set.features if feature_set is not None else []
        if not features:
            logger.debug(f"No metadata feature at {geo_point} for release {release_number}")
            return None

        attributes = features[0].attributes

        return ReleaseMetadata(
            release_num=release_number,
            release_date=release.release_date_label,
            date=attributes.get(SOURCE_DATE),
            provider=attributes.get(SOURCE_PROVIDER),
            source=attributes.get(SOURCE_NAME),
            resolution=attributes.get(RESOLUTION),
            accuracy=attributes.get(ACCURACY),
        )
