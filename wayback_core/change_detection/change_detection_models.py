"""
Change Detection Data Models

This module defines the models used while resolving the releases in which a
tile changed: the query point and tile coordinate, the parsed tilemap
response, the per-release download candidates and the downloaded samples.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..exceptions import ImageFetchError
from ..utils import long2tile, lat2tile, zoom_to_level


class GeoPoint(BaseModel):
    """WGS84 location of interest."""
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in degrees")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude in degrees")

    model_config = {"frozen": True}


class TileCoordinate(BaseModel):
    """Address of one raster tile in the slippy-map scheme."""
    level: int = Field(..., ge=0, description="Tile level (integer zoom)")
    row: int = Field(..., ge=0, description="Tile row")
    column: int = Field(..., ge=0, description="Tile column")

    model_config = {"frozen": True}

    @classmethod
    def from_point(cls, longitude: float, latitude: float, zoom: float) -> "TileCoordinate":
        """Tile containing a WGS84 point; fractional zoom is rounded to a level.

        Points on the antimeridian or beyond the Web Mercator latitude limit
        are clamped to the edge tiles.
        """
        level = zoom_to_level(zoom)
        max_index = 2 ** level - 1
        return cls(
            level=level,
            row=min(max(lat2tile(latitude, level), 0), max_index),
            column=min(max(long2tile(longitude, level), 0), max_index),
        )

    def __str__(self) -> str:
        return f"{self.level}/{self.row}/{self.column}"


class TilemapResponse(BaseModel):
    """Body of ``/tilemap/{release}/{level}/{row}/{col}``.

    ``data[0]`` flags a local change at the probed release; ``select[0]``,
    when present, is the release that change was last made in.
    """
    data: List[int] = Field(..., description="Change flag of the probed release")
    select: List[int] = Field(default_factory=list)
    valid: bool = False
    location: Optional[Dict[str, Any]] = None

    @property
    def has_change(self) -> bool:
        return bool(self.data) and bool(self.data[0])

    def effective_release(self, probed_release: int) -> int:
        """Release the change belongs to, falling back to the probed one."""
        if self.select and self.select[0]:
            return int(self.select[0])
        return probed_release


class Candidate(BaseModel):
    """A release to download the tile image of."""
    release_number: int
    url: str

    model_config = {"frozen": True}


class ImageSample(BaseModel):
    """Raw tile image bytes of one release."""
    release_number: int
    data: bytes

    model_config = {"frozen": True}


@dataclass
class ImageFetchOutcome:
    """Result of one tile image download: a sample or an error, never both."""
    release_number: int
    sample: Optional[ImageSample] = None
    error: Optional[ImageFetchError] = None

    @property
    def ok(self) -> bool:
        return self.sample is not None
