"""Static admin dashboard linking to the exports and the API docs."""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from beetrail_api.app.core.security import ROLE_ADMIN, require_role


router = APIRouter()

ADMIN_PAGE = """
<h1>Admin Dashboard</h1>
<ul>
  <li><a href="/export/hives">Export Hive Logs CSV</a></li>
  <li><a href="/export/crops">Export Crop Entries CSV</a></li>
  <li><a href="/api-docs">API Documentation</a></li>
</ul>
"""


@router.get("", response_class=HTMLResponse, responses={403: {"description": "Admin access required."}})
async def admin_page(current_user: dict = Depends(require_role(ROLE_ADMIN))) -> HTMLResponse:
    return HTMLResponse(ADMIN_PAGE)
