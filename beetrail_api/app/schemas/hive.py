"""
Pydantic models for hive placement logs.

``HiveCreate`` validates the request body (ranges for coordinates, at
least one colony); ``HiveRead`` is what the API returns.
"""

from datetime import datetime
from typing import List

from pydantic import Field

from .common import CamelModel, IsoDate


class HiveBase(CamelModel):
    hive_id: str = Field(..., alias="hiveId", min_length=1, examples=["HIVE004"])
    date_placed: IsoDate = Field(..., alias="datePlaced", examples=["2025-04-08"])
    latitude: float = Field(..., ge=-90, le=90, examples=[28.7041])
    longitude: float = Field(..., ge=-180, le=180, examples=[77.1025])
    num_colonies: int = Field(..., alias="numColonies", ge=1, examples=[5])


class HiveCreate(HiveBase):
    """Schema for logging a hive placement."""


class HiveRead(HiveBase):
    id: int
    date_created: datetime = Field(..., alias="dateCreated")


class HiveCreated(CamelModel):
    message: str
    hive: HiveRead


class HiveList(CamelModel):
    """One page of hive logs plus totals for the whole filtered set."""

    hives: List[HiveRead]
    total: int
    page: int
    pages: int
