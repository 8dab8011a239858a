"""
Topic persistence (raw SQL). Topics are seeded externally and read-only here.
"""

from __future__ import annotations

from core.db import Database


class TopicsRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_topics(self) -> list[dict]:
        return await self.db.fetch_all(
            """
            SELECT slug, description
            FROM topics
            """
        )
