"""
Business logic for hive placement logs.

Hive logs are append-only.  ``hive_id`` is unique at the database
level, so a duplicate insert surfaces as ``sqlite3.IntegrityError`` and
is reported as ``ConflictError``.
"""

import asyncio
import logging
import math
import sqlite3
from datetime import date, datetime, timezone
from typing import Iterator, List, Optional, Tuple

from ..core.db import Database
from ..core.errors import ConflictError, ValidationError
from ..schemas.hive import HiveCreate, HiveList, HiveRead


logger = logging.getLogger(__name__)

HIVE_COLUMNS = "id, hive_id, date_placed, latitude, longitude, num_colonies, date_created"

MAX_PAGE_SIZE = 100
# MAX_PAGE * MAX_PAGE_SIZE must fit in a SQLite INTEGER.
MAX_PAGE = 2 ** 31


def row_to_hive(row: sqlite3.Row) -> HiveRead:
    return HiveRead(
        id=row["id"],
        hive_id=row["hive_id"],
        date_placed=row["date_placed"],
        latitude=row["latitude"],
        longitude=row["longitude"],
        num_colonies=row["num_colonies"],
        date_created=row["date_created"],
    )


class HiveService:
    """Hive log store backed by the ``hives`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def add_hive(self, data: HiveCreate, current_user: dict) -> HiveRead:
        """Persist a hive log and return the stored record."""
        logger.info("User %s is logging hive %s", current_user.get("username"), data.hive_id)
        return await asyncio.to_thread(self._add_hive, data)

    def _add_hive(self, data: HiveCreate) -> HiveRead:
        created = datetime.now(timezone.utc).isoformat()
        conn = self.db.connect()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO hives (hive_id, date_placed, latitude, longitude, num_colonies, date_created)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    data.hive_id,
                    data.date_placed.isoformat(),
                    data.latitude,
                    data.longitude,
                    data.num_colonies,
                    created,
                ),
            )
            hive_pk = cursor.lastrowid
            conn.commit()
        except sqlite3.IntegrityError:
            conn.rollback()
            logger.warning("Duplicate hive id %s rejected", data.hive_id)
            raise ConflictError("hiveId must be unique")
        finally:
            conn.close()
        return HiveRead(id=hive_pk, date_created=created, **data.model_dump())

    async def list_hives(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        page: int = 1,
        limit: int = 10,
    ) -> HiveList:
        """Return one page of hive logs placed within ``[start_date, end_date]``.

        Both bounds are optional and inclusive.  Results are ordered by
        placement date, newest first.  ``pages`` is the ceiling of
        ``total / limit``.  ``limit`` is clamped to ``MAX_PAGE_SIZE``.
        """
        limit = min(limit, MAX_PAGE_SIZE)
        if start_date and end_date and start_date > end_date:
            raise ValidationError("startDate must not be after endDate", field="startDate")
        return await asyncio.to_thread(self._list_hives, start_date, end_date, page, limit)

    def _list_hives(
        self,
        start_date: Optional[date],
        end_date: Optional[date],
        page: int,
        limit: int,
    ) -> HiveList:
        where, params = _date_filter(start_date, end_date)
        conn = self.db.connect()
        try:
            cursor = conn.cursor()
            total = cursor.execute(f"SELECT COUNT(*) FROM hives{where}", params).fetchone()[0]
            rows = cursor.execute(
                f"SELECT {HIVE_COLUMNS} FROM hives{where} "
                "ORDER BY date_placed DESC, id DESC LIMIT ? OFFSET ?",
                params + (limit, (page - 1) * limit),
            ).fetchall()
        finally:
            conn.close()
        return HiveList(
            hives=[row_to_hive(row) for row in rows],
            total=total,
            page=page,
            pages=math.ceil(total / limit),
        )

    async def all_hives(self) -> List[HiveRead]:
        """Every hive log in insertion order; used by the CSV export."""
        return await asyncio.to_thread(lambda: list(self._iter_all()))

    def _iter_all(self) -> Iterator[HiveRead]:
        conn = self.db.connect()
        try:
            for row in conn.execute(f"SELECT {HIVE_COLUMNS} FROM hives ORDER BY id"):
                yield row_to_hive(row)
        finally:
            conn.close()


def _date_filter(start_date: Optional[date], end_date: Optional[date]) -> Tuple[str, tuple]:
    clauses: list[str] = []
    params: list = []
    if start_date:
        clauses.append("date_placed >= ?")
        params.append(start_date.isoformat())
    if end_date:
        clauses.append("date_placed <= ?")
        params.append(end_date.isoformat())
    if not clauses:
        return "", ()
    return " WHERE " + " AND ".join(clauses), tuple(params)
