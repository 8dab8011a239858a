"""
User persistence (raw SQL). Users are seeded externally and read-only here.
"""

from __future__ import annotations

from core.db import Database
from core.errors import NotFound
from core.validation import storable_text

USER_NOT_FOUND = "User not found"


class UsersRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_users(self) -> list[dict]:
        return await self.db.fetch_all(
            """
            SELECT username, name, avatar_url
            FROM users
            """
        )

    async def get_user_by_username(self, username: str) -> dict:
        if not storable_text(username):
            raise NotFound(USER_NOT_FOUND)
        row = await self.db.fetch_one(
            """
            SELECT username, name, avatar_url
            FROM users
            WHERE username = $1
            """,
            username,
        )
        if row is None:
            raise NotFound(USER_NOT_FOUND)
        return row
