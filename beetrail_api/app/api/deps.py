"""FastAPI dependencies that build services from the application context."""

from datetime import date
from typing import Optional

from fastapi import Depends

from ..core.context import AppContext, get_context
from ..core.errors import ValidationError
from ..schemas.common import parse_iso_date
from ..services.crop_service import CropService
from ..services.export_service import ExportService
from ..services.hive_service import HiveService
from ..services.user_service import UserService


def get_user_service(ctx: AppContext = Depends(get_context)) -> UserService:
    return UserService(ctx.db)


def get_hive_service(ctx: AppContext = Depends(get_context)) -> HiveService:
    return HiveService(ctx.db)


def get_crop_service(ctx: AppContext = Depends(get_context)) -> CropService:
    return CropService(ctx.db)


def get_export_service(
    hives: HiveService = Depends(get_hive_service),
    crops: CropService = Depends(get_crop_service),
) -> ExportService:
    return ExportService(hives, crops)


def query_date(value: Optional[str], field: str) -> Optional[date]:
    """Parse an optional ISO-8601 query parameter, reporting failures against ``field``."""
    if value is None or value == "":
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field} must be an ISO-8601 date", field=field)
