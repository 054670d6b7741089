"""
CSV export of hive logs and crop entries.

Column order is fixed by ``HIVE_FIELDS`` and ``CROP_FIELDS``.  Crop
locations are flattened back into separate ``latitude`` and
``longitude`` columns.
"""

import csv
import io
from typing import Any, Dict, Iterable, List

from ..schemas.crop import CropRead
from ..schemas.hive import HiveRead
from .crop_service import CropService
from .hive_service import HiveService


HIVE_FIELDS = ["hiveId", "datePlaced", "latitude", "longitude", "numColonies", "dateCreated"]
CROP_FIELDS = [
    "name",
    "floweringStart",
    "floweringEnd",
    "recommendedHiveDensity",
    "latitude",
    "longitude",
    "dateCreated",
]


def to_csv(fields: List[str], rows: Iterable[Dict[str, Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=fields, extrasaction="ignore", lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


def hive_row(hive: HiveRead) -> Dict[str, Any]:
    return hive.model_dump(mode="json", by_alias=True)


def crop_row(crop: CropRead) -> Dict[str, Any]:
    row = crop.model_dump(mode="json", by_alias=True)
    row["latitude"] = crop.location.latitude
    row["longitude"] = crop.location.longitude
    return row


class ExportService:
    def __init__(self, hives: HiveService, crops: CropService) -> None:
        self.hives = hives
        self.crops = crops

    async def hives_csv(self) -> str:
        return to_csv(HIVE_FIELDS, (hive_row(h) for h in await self.hives.all_hives()))

    async def crops_csv(self) -> str:
        return to_csv(CROP_FIELDS, (crop_row(c) for c in await self.crops.all_crops()))
