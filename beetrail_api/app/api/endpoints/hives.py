"""
Hive log endpoints.

Any authenticated user may log hives and browse the log.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from beetrail_api.app.api.deps import get_hive_service, query_date
from beetrail_api.app.core.security import get_current_user
from beetrail_api.app.schemas.hive import HiveCreate, HiveCreated, HiveList
from beetrail_api.app.services.hive_service import MAX_PAGE, MAX_PAGE_SIZE, HiveService


router = APIRouter()


@router.post(
    "",
    response_model=HiveCreated,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid input or duplicate hiveId."}},
)
async def add_hive(
    hive: HiveCreate,
    current_user: dict = Depends(get_current_user),
    hives: HiveService = Depends(get_hive_service),
) -> HiveCreated:
    """Add a new hive log.  ``hiveId`` must be unique."""
    stored = await hives.add_hive(hive, current_user)
    return HiveCreated(message="Hive log added successfully", hive=stored)


@router.get("", response_model=HiveList)
async def list_hives(
    start_date: Optional[str] = Query(None, alias="startDate", description="Only hives placed on or after this date."),
    end_date: Optional[str] = Query(None, alias="endDate", description="Only hives placed on or before this date."),
    page: int = Query(1, ge=1, le=MAX_PAGE, description="Page number, starting at 1."),
    limit: int = Query(10, ge=1, description=f"Number of results per page; values above {MAX_PAGE_SIZE} are clamped."),
    current_user: dict = Depends(get_current_user),
    hives: HiveService = Depends(get_hive_service),
) -> HiveList:
    """Retrieve hive logs, newest placement first, with optional date filtering."""
    return await hives.list_hives(
        start_date=query_date(start_date, "startDate"),
        end_date=query_date(end_date, "endDate"),
        page=page,
        limit=limit,
    )
