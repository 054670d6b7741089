"""
Sync token endpoint.

The token is simply the current server time in epoch milliseconds.
Clients compare it with the token they stored earlier to decide whether
to refetch; the server keeps no record of what changed in between.
"""

from fastapi import APIRouter, Depends

from beetrail_api.app.core.security import get_current_user, now_ms
from beetrail_api.app.schemas.user import SyncResponse


router = APIRouter()


@router.get("", response_model=SyncResponse)
async def get_sync_token(current_user: dict = Depends(get_current_user)) -> SyncResponse:
    """Get a sync token for offline synchronization."""
    return SyncResponse(sync_token=now_ms())
