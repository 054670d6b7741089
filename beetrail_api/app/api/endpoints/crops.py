"""
Crop calendar endpoints.

``/nearby`` answers "what is flowering around me on this date": crops
within ``radius`` kilometres of the given point whose flowering window
contains ``date``.  The list is sorted nearest first.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from beetrail_api.app.api.deps import get_crop_service, query_date
from beetrail_api.app.core.security import get_current_user
from beetrail_api.app.schemas.crop import CropCreate, CropCreated, NearbyCrops
from beetrail_api.app.services.crop_service import DEFAULT_RADIUS_KM, CropService


router = APIRouter()


@router.post(
    "",
    response_model=CropCreated,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid input or flowering dates out of order."}},
)
async def add_crop(
    crop: CropCreate,
    current_user: dict = Depends(get_current_user),
    crops: CropService = Depends(get_crop_service),
) -> CropCreated:
    """Add a crop calendar entry."""
    stored = await crops.add_crop(crop, current_user)
    return CropCreated(message="Crop entry added successfully", crop=stored)


@router.get("/nearby", response_model=NearbyCrops, response_model_exclude_none=True)
async def nearby_crops(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    radius: float = Query(DEFAULT_RADIUS_KM, ge=1, description="Radius in km."),
    date: Optional[str] = Query(None, description="Date to check flowering windows against; defaults to today."),
    current_user: dict = Depends(get_current_user),
    crops: CropService = Depends(get_crop_service),
) -> NearbyCrops:
    """Get nearby crop opportunities flowering on the given date."""
    found = await crops.find_nearby(latitude, longitude, radius, query_date(date, "date"))
    if not found:
        return NearbyCrops(crops=[], message="No crops found nearby for the given date")
    return NearbyCrops(crops=found)
