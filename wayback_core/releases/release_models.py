"""Release Data Models

This module defines the Pydantic model for one World Imagery Wayback release
and the helpers that validate raw configuration entries and derive a release
date from the release title.
"""

import re
from datetime import datetime
from typing import Any, Dict, NamedTuple, Optional

from pydantic import BaseModel, Field


RELEASE_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")

# Every one of these must be a string for a configuration entry to be usable
REQUIRED_ENTRY_FIELDS = (
    "itemTitle",
    "itemID",
    "itemURL",
    "metadataLayerUrl",
    "metadataLayerItemID",
    "layerIdentifier",
)


class ReleaseDate(NamedTuple):
    label: str
    timestamp: int


def extract_release_date(title: Optional[str]) -> ReleaseDate:
    """Extract the release date from a title such as "World Imagery (Wayback 2014-02-20)".

    Only the first ``YYYY-MM-DD`` occurrence is used. The timestamp is the
    local midnight of that day in epoch milliseconds.

    Args:
        title: Release title from the wayback configuration

    Returns:
        ReleaseDate; ``("", 0)`` when the title is empty, has no date or the
        date is not a real calendar day
    """
    if not title or not title.strip():
        return ReleaseDate("", 0)

    match = RELEASE_DATE_PATTERN.search(title)
    if not match:
        return ReleaseDate("", 0)

    label = match.group(0)
    year, month, day = (int(part) for part in label.split("-"))

    try:
        local_midnight = datetime(year, month, day)
    except ValueError:
        return ReleaseDate("", 0)

    return ReleaseDate(label, int(round(local_midnight.timestamp() * 1000)))


def is_valid_release_entry(entry: Any) -> bool:
    """Structural check of one configuration entry."""
    if not isinstance(entry, dict):
        return False
    return all(isinstance(entry.get(name), str) for name in REQUIRED_ENTRY_FIELDS)


class ReleaseRecord(BaseModel):
    """Data model for one World Imagery Wayback release.

    The release number is the only stable identity; the date fields are
    derived from the title and may be empty.

    Attributes:
        release_num: Key of the release in the wayback configuration
        release_date_label: Release date as ``YYYY-MM-DD`` or ""
        release_datetime: Local midnight of the release date in epoch ms, or 0
        item_id: ArcGIS Online item id of the WMTS layer
        item_title: Release title, e.g. "World Imagery (Wayback 2014-02-20)"
        item_url: Tile URL template with {level}, {row} and {col} placeholders
        metadata_layer_item_id: ArcGIS Online item id of the metadata layer
        metadata_layer_url: URL of the metadata map service
        layer_identifier: Release identifier such as "WB_2014_R01"
        item_release_name: Optional release name
    """

    release_num: int = Field(..., alias="releaseNum", description="Wayback release number")
    release_date_label: str = Field("", alias="releaseDateLabel")
    release_datetime: int = Field(0, alias="releaseDatetime")
    item_id: str = Field(..., alias="itemID")
    item_title: str = Field(..., alias="itemTitle")
    item_url: str = Field(..., alias="itemURL")
    metadata_layer_item_id: str = Field(..., alias="metadataLayerItemID")
    metadata_layer_url: str = Field(..., alias="metadataLayerUrl")
    layer_identifier: Optional[str] = Field(None, alias="layerIdentifier")
    item_release_name: Optional[str] = Field(None, alias="itemReleaseName")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "releaseNum": 10,
                "releaseDateLabel": "2014-02-20",
                "releaseDatetime": 1392854400000,
                "itemID": "903f0abe9c3b452dafe1ca5b8dd858b9",
                "itemTitle": "World Imagery (Wayback 2014-02-20)",
                "itemURL": "https://wayback.maptiles.arcgis.com/arcgis/rest/services/World_Imagery/WMTS/1.0.0/default028mm/MapServer/tile/10/{level}/{row}/{col}",
                "metadataLayerItemID": "78e801fab4d24ab9a6053c7a461479be",
                "metadataLayerUrl": "https://metadata.maptiles.arcgis.com/arcgis/rest/services/World_Imagery_Metadata_2014_r01/MapServer",
                "layerIdentifier": "WB_2014_R01"
            }
        }
    }

    @classmethod
    def from_config_entry(cls, release_num: int, entry: Dict[str, Any]) -> "ReleaseRecord":
        """Build a record from a configuration entry keyed by ``release_num``."""
        release_date = extract_release_date(entry.get("itemTitle"))
        return cls.model_validate({
            **entry,
            "releaseNum": release_num,
            "releaseDateLabel": release_date.label,
            "releaseDatetime": release_date.timestamp,
        })

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the configuration's camelCase keys."""
        return self.model_dump(by_alias=True)
