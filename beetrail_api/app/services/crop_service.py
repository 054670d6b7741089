"""
Business logic for the crop calendar.

Crops are stored with plain ``latitude``/``longitude`` columns under a
composite index.  ``find_nearby`` asks SQLite for the candidates inside
a spherical bounding box whose flowering window covers the requested
date, then keeps only those whose great-circle distance is within the
radius, nearest first.
"""

import asyncio
import logging
import sqlite3
from datetime import date, datetime, timezone
from typing import Iterator, List, Optional

from ..core.db import Database
from ..core.errors import ValidationError
from ..core.geo import bounding_box, haversine_km
from ..schemas.crop import CropCreate, CropRead, GeoPoint, NearbyCrop


logger = logging.getLogger(__name__)

CROP_COLUMNS = (
    "id, name, flowering_start, flowering_end, recommended_hive_density, "
    "latitude, longitude, date_created"
)

DEFAULT_RADIUS_KM = 100.0


def row_to_crop(row: sqlite3.Row) -> CropRead:
    return CropRead(
        id=row["id"],
        name=row["name"],
        flowering_start=row["flowering_start"],
        flowering_end=row["flowering_end"],
        recommended_hive_density=row["recommended_hive_density"],
        location=GeoPoint(coordinates=[row["longitude"], row["latitude"]]),
        date_created=row["date_created"],
    )


class CropService:
    """Crop calendar store backed by the ``crops`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def add_crop(self, data: CropCreate, current_user: dict) -> CropRead:
        """Persist a crop entry.

        Raises ``ValidationError`` unless ``flowering_start`` is strictly
        before ``flowering_end``.
        """
        if data.flowering_start >= data.flowering_end:
            raise ValidationError("floweringStart must be before floweringEnd", field="floweringStart")
        logger.info("User %s is adding crop '%s'", current_user.get("username"), data.name)
        return await asyncio.to_thread(self._add_crop, data)

    def _add_crop(self, data: CropCreate) -> CropRead:
        created = datetime.now(timezone.utc).isoformat()
        conn = self.db.connect()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO crops (name, flowering_start, flowering_end, recommended_hive_density,
                                   latitude, longitude, date_created)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data.name,
                    data.flowering_start.isoformat(),
                    data.flowering_end.isoformat(),
                    data.recommended_hive_density,
                    data.latitude,
                    data.longitude,
                    created,
                ),
            )
            crop_id = cursor.lastrowid
            conn.commit()
        finally:
            conn.close()
        return CropRead(
            id=crop_id,
            name=data.name,
            flowering_start=data.flowering_start,
            flowering_end=data.flowering_end,
            recommended_hive_density=data.recommended_hive_density,
            location=GeoPoint(coordinates=[data.longitude, data.latitude]),
            date_created=created,
        )

    async def find_nearby(
        self,
        latitude: float,
        longitude: float,
        radius_km: float = DEFAULT_RADIUS_KM,
        on_date: Optional[date] = None,
    ) -> List[NearbyCrop]:
        """Crops within ``radius_km`` of the point that are flowering on ``on_date``.

        ``on_date`` defaults to today (UTC) and is inclusive at both ends
        of the flowering window.
        """
        if on_date is None:
            on_date = datetime.now(timezone.utc).date()
        return await asyncio.to_thread(self._find_nearby, latitude, longitude, radius_km, on_date)

    def _find_nearby(self, latitude: float, longitude: float, radius_km: float, on_date: date) -> List[NearbyCrop]:
        box = bounding_box(latitude, longitude, radius_km)
        lon_clause = " OR ".join("longitude BETWEEN ? AND ?" for _ in box.lon_ranges)
        params: list = [on_date.isoformat(), on_date.isoformat(), box.min_lat, box.max_lat]
        for low, high in box.lon_ranges:
            params.extend([low, high])
        query = (
            f"SELECT {CROP_COLUMNS} FROM crops "
            "WHERE flowering_start <= ? AND flowering_end >= ? "
            "AND latitude BETWEEN ? AND ? "
            f"AND ({lon_clause})"
        )
        conn = self.db.connect()
        try:
            rows = conn.execute(query, params).fetchall()
        finally:
            conn.close()

        matches = []
        for row in rows:
            distance = haversine_km(latitude, longitude, row["latitude"], row["longitude"])
            if distance <= radius_km:
                matches.append((distance, row))
        matches.sort(key=lambda item: (item[0], item[1]["id"]))
        logger.debug(
            "Nearby search at (%s, %s) r=%s km on %s: %d candidates, %d matches",
            latitude, longitude, radius_km, on_date, len(rows), len(matches),
        )
        return [
            NearbyCrop(distance_km=round(distance, 3), **row_to_crop(row).model_dump())
            for distance, row in matches
        ]

    async def all_crops(self) -> List[CropRead]:
        """Every crop entry in insertion order; used by the CSV export."""
        return await asyncio.to_thread(lambda: list(self._iter_all()))

    def _iter_all(self) -> Iterator[CropRead]:
        conn = self.db.connect()
        try:
            for row in conn.execute(f"SELECT {CROP_COLUMNS} FROM crops ORDER BY id"):
                yield row_to_crop(row)
        finally:
            conn.close()
