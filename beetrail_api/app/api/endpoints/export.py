"""CSV export endpoints (admin only)."""

from fastapi import APIRouter, Depends, Response

from beetrail_api.app.api.deps import get_export_service
from beetrail_api.app.core.security import ROLE_ADMIN, require_role
from beetrail_api.app.services.export_service import ExportService


router = APIRouter()

ADMIN_RESPONSES = {
    200: {"content": {"text/csv": {}}, "description": "CSV attachment."},
    403: {"description": "Admin access required."},
}


def csv_attachment(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/hives", response_class=Response, responses=ADMIN_RESPONSES)
async def export_hives(
    current_user: dict = Depends(require_role(ROLE_ADMIN)),
    exports: ExportService = Depends(get_export_service),
) -> Response:
    """Export hive logs as CSV."""
    return csv_attachment(await exports.hives_csv(), "hive_logs.csv")


@router.get("/crops", response_class=Response, responses=ADMIN_RESPONSES)
async def export_crops(
    current_user: dict = Depends(require_role(ROLE_ADMIN)),
    exports: ExportService = Depends(get_export_service),
) -> Response:
    """Export crop entries as CSV, with the location split into latitude and longitude."""
    return csv_attachment(await exports.crops_csv(), "crop_entries.csv")
