"""
Pydantic models for crop calendar entries.

Crops carry their position as a GeoJSON ``Point`` whose coordinates are
``[longitude, latitude]``.  Requests send plain ``latitude`` and
``longitude`` fields; the point is built by the service.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from .common import CamelModel, IsoDate


class GeoPoint(CamelModel):
    type: Literal["Point"] = "Point"
    coordinates: List[float] = Field(..., min_length=2, max_length=2, examples=[[75.7873, 26.9124]])

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]


class CropBase(CamelModel):
    name: str = Field(..., min_length=1, examples=["Sunflower"])
    flowering_start: IsoDate = Field(..., alias="floweringStart", examples=["2025-04-10"])
    flowering_end: IsoDate = Field(..., alias="floweringEnd", examples=["2025-04-25"])
    recommended_hive_density: int = Field(..., alias="recommendedHiveDensity", ge=1, examples=[5])


class CropCreate(CropBase):
    """Schema for adding a crop calendar entry.

    The ordering of ``floweringStart`` and ``floweringEnd`` is checked
    by ``CropService.add_crop``.
    """

    latitude: float = Field(..., ge=-90, le=90, examples=[26.9124])
    longitude: float = Field(..., ge=-180, le=180, examples=[75.7873])


class CropRead(CropBase):
    id: int
    location: GeoPoint
    date_created: datetime = Field(..., alias="dateCreated")


class CropCreated(CamelModel):
    message: str
    crop: CropRead


class NearbyCrop(CropRead):
    distance_km: float = Field(..., alias="distanceKm")


class NearbyCrops(CamelModel):
    crops: List[NearbyCrop]
    message: Optional[str] = None
