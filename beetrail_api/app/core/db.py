"""
SQLite database integration and simple migration system.

``Database`` wraps the path to a SQLite file and hands out fresh
connections; it is created once at startup and shared through the
application context.  ``Database.init`` applies the ordered
``MIGRATIONS`` list, recording applied versions in the ``migrations``
table.  To change the schema, append a new ``(version, sql)`` pair.

Uniqueness of usernames and hive identifiers is enforced here with
``UNIQUE`` constraints so concurrent inserts cannot both succeed.
"""

import logging
import os
import sqlite3
from pathlib import Path


logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL,
            role TEXT NOT NULL CHECK (role IN ('beekeeper', 'admin')),
            date_created TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS hives (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            hive_id TEXT NOT NULL UNIQUE,
            date_placed TEXT NOT NULL,
            latitude REAL NOT NULL CHECK (latitude BETWEEN -90 AND 90),
            longitude REAL NOT NULL CHECK (longitude BETWEEN -180 AND 180),
            num_colonies INTEGER NOT NULL CHECK (num_colonies >= 1),
            date_created TEXT NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_hives_date_placed ON hives (date_placed);

        CREATE TABLE IF NOT EXISTS crops (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            flowering_start TEXT NOT NULL,
            flowering_end TEXT NOT NULL,
            recommended_hive_density INTEGER NOT NULL CHECK (recommended_hive_density >= 1),
            latitude REAL NOT NULL CHECK (latitude BETWEEN -90 AND 90),
            longitude REAL NOT NULL CHECK (longitude BETWEEN -180 AND 180),
            date_created TEXT NOT NULL,
            CHECK (flowering_start < flowering_end)
        );

        CREATE INDEX IF NOT EXISTS idx_crops_location ON crops (latitude, longitude);
        CREATE INDEX IF NOT EXISTS idx_crops_flowering ON crops (flowering_start, flowering_end);
        """,
    ),
]


class Database:
    """Handle on the SQLite file backing the service."""

    def __init__(self, url: str) -> None:
        self.url = url

    @property
    def path(self) -> str:
        if os.path.isabs(self.url):
            return self.url
        return str(Path(self.url).resolve())

    def connect(self) -> sqlite3.Connection:
        """Open a new connection with rows accessible by column name."""
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    def init(self) -> None:
        """Create the database file if needed and apply pending migrations."""
        conn = self.connect()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                CREATE TABLE IF NOT EXISTS migrations (
                    version INTEGER PRIMARY KEY,
                    applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
                """
            )
            row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
            current = row["version"] or 0
            for version, sql in MIGRATIONS:
                if version <= current:
                    continue
                logger.info("Applying migration %s to %s", version, self.path)
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
            conn.commit()
        finally:
            conn.close()
