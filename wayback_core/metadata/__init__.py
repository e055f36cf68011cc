"""
Imagery metadata of World Imagery Wayback releases.

This module queries the per-release metadata map services through the ArcGIS
Python API.
"""

from .metadata_models import ReleaseMetadata, METADATA_FIELD_NAMES
from .metadata_query import MetadataQueryService, get_layer_id

__all__ = [
    "ReleaseMetadata",
    "METADATA_FIELD_NAMES",
    "MetadataQueryService",
    "get_layer_id",
]
