"""Imagery metadata models and the field names of the wayback metadata layers."""

from typing import Optional

from pydantic import BaseModel, Field


# Fields of the per-release metadata map service
SOURCE_DATE = "SRC_DATE2"
SOURCE_PROVIDER = "NICE_DESC"
SOURCE_NAME = "SRC_DESC"
RESOLUTION = "SAMP_RES"
ACCURACY = "MY_ACC"

METADATA_FIELD_NAMES = [SOURCE_DATE, SOURCE_PROVIDER, SOURCE_NAME, RESOLUTION, ACCURACY]

# The metadata service has sublayers 0-13 for tile levels 23 down to 10
MAX_ZOOM = 23
MIN_ZOOM = 10


class ReleaseMetadata(BaseModel):
    """Acquisition information of the imagery shown in a wayback tile.

    Attributes:
        release_num: Wayback release the metadata was queried for
        release_date: Release date label of that release
        date: Acquisition date of the image in epoch milliseconds
        provider: Provider of the image
        source: Source of the image
        resolution: Ground distance represented by one source pixel, in meters
        accuracy: Meters within which the displayed objects are positioned
    """
    release_num: int
    release_date: str = ""
    date: Optional[int] = Field(None, description="Acquisition date (epoch ms)")
    provider: Optional[str] = None
    source: Optional[str] = None
    resolution: Optional[float] = None
    accuracy: Optional[float] = None

    model_config = {"frozen": True}
