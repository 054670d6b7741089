"""
Business logic for users.

Users are created once at registration and never updated.  The
``UNIQUE`` constraint on ``users.username`` decides which of two
concurrent registrations wins; the loser gets a ``ConflictError``.
"""

import asyncio
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Optional

from ..core.db import Database
from ..core.errors import ConflictError
from ..core.security import hash_password, verify_password
from ..schemas.user import UserCreate, UserRead


logger = logging.getLogger(__name__)


class UserService:
    """Credential store backed by the ``users`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def register(self, data: UserCreate) -> UserRead:
        """Hash the password and persist a new user.

        Raises ``ConflictError`` if the username is taken.
        """
        return await asyncio.to_thread(self._register, data)

    def _register(self, data: UserCreate) -> UserRead:
        hashed = hash_password(data.password)
        conn = self.db.connect()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO users (username, password, role, date_created) VALUES (?, ?, ?, ?)",
                (data.username, hashed, data.role, datetime.now(timezone.utc).isoformat()),
            )
            user_id = cursor.lastrowid
            conn.commit()
        except sqlite3.IntegrityError:
            conn.rollback()
            logger.warning("Registration rejected, username %s already exists", data.username)
            raise ConflictError("Username already exists")
        finally:
            conn.close()
        logger.info("Registered user %s (%s)", data.username, data.role)
        return UserRead(id=user_id, username=data.username, role=data.role)

    async def authenticate(self, username: str, password: str) -> Optional[UserRead]:
        """Return the user if the credentials match, otherwise ``None``.

        Unknown usernames and wrong passwords are indistinguishable to
        the caller.
        """
        return await asyncio.to_thread(self._authenticate, username, password)

    def _authenticate(self, username: str, password: str) -> Optional[UserRead]:
        conn = self.db.connect()
        try:
            row = conn.execute(
                "SELECT id, username, password, role FROM users WHERE username = ?",
                (username,),
            ).fetchone()
        finally:
            conn.close()
        if row is None or not verify_password(password, row["password"]):
            return None
        return UserRead(id=row["id"], username=row["username"], role=row["role"])
