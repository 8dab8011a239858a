"""
Article persistence (raw SQL).

`comment_count` is never stored: it is computed by joining `comments` at read
time. Vote changes are relative updates executed in a single statement.
"""

from __future__ import annotations

import logging
from typing import Any

import asyncpg

from core.db import Database, referenced_table
from core.errors import InvalidInput, NotFound
from core.validation import (
    INVALID_INC_VOTES,
    check_order,
    check_sort_by,
    parse_id,
    parse_inc_votes,
    require_fields,
    storable_text,
)

logger = logging.getLogger(__name__)

INVALID_ARTICLE_ID = "Invalid article ID"
ARTICLE_NOT_FOUND = "Article ID not found"
TOPIC_NOT_FOUND = "Topic not found"
USERNAME_NOT_FOUND = "Username not found"

_ARTICLE_COLUMNS = "article_id, author, title, body, topic, created_at, votes"


class ArticlesRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def get_article_by_id(self, article_id: Any) -> dict:
        ident = parse_id(article_id, message=INVALID_ARTICLE_ID)
        row = await self.db.fetch_one(
            """
            SELECT a.article_id, a.author, a.title, a.body, a.topic, a.created_at, a.votes,
                   COUNT(c.comment_id)::int AS comment_count
            FROM articles a
            LEFT JOIN comments c ON c.article_id = a.article_id
            WHERE a.article_id = $1
            GROUP BY a.article_id
            """,
            ident,
        )
        if row is None:
            raise NotFound(ARTICLE_NOT_FOUND)
        return row

    async def update_article_votes(self, article_id: Any, inc_votes: Any) -> dict:
        ident = parse_id(article_id, message=INVALID_ARTICLE_ID)
        delta = parse_inc_votes(inc_votes)
        try:
            row = await self.db.fetch_one(
                f"""
                UPDATE articles
                SET votes = votes + $2
                WHERE article_id = $1
                RETURNING {_ARTICLE_COLUMNS}
                """,
                ident,
                delta,
            )
        except asyncpg.exceptions.NumericValueOutOfRangeError as exc:
            # The stored total would leave the `integer` range.
            raise InvalidInput(INVALID_INC_VOTES) from exc
        if row is None:
            raise NotFound(ARTICLE_NOT_FOUND)
        return row

    async def list_articles(
        self,
        *,
        sort_by: str = "created_at",
        order: str = "desc",
        topic: str | None = None,
    ) -> list[dict]:
        """
        List articles (without `body`), optionally filtered to one topic.

        An unknown topic is NotFound; a known topic without articles yields [].
        """
        # Both are checked against fixed allowlists before reaching the SQL text.
        column = check_sort_by(sort_by)
        direction = check_order(order)

        where = ""
        params: list[Any] = []
        if topic is not None:
            if not storable_text(topic):
                raise NotFound(TOPIC_NOT_FOUND)
            exists = await self.db.fetch_one(
                """
                SELECT 1 AS ok
                FROM topics
                WHERE slug = $1
                LIMIT 1
                """,
                topic,
            )
            if exists is None:
                raise NotFound(TOPIC_NOT_FOUND)
            where = "WHERE a.topic = $1"
            params.append(topic)

        return await self.db.fetch_all(
            f"""
            SELECT a.author, a.title, a.article_id, a.topic, a.created_at, a.votes,
                   COUNT(c.comment_id)::int AS comment_count
            FROM articles a
            LEFT JOIN comments c ON c.article_id = a.article_id
            {where}
            GROUP BY a.article_id
            ORDER BY a.{column} {direction.upper()}
            """,
            *params,
        )

    async def insert_article(self, *, author: Any, title: Any, body: Any, topic: Any) -> dict:
        require_fields(author=author, title=title, body=body, topic=topic)
        try:
            row = await self.db.fetch_one(
                f"""
                INSERT INTO articles (author, title, body, topic)
                VALUES ($1, $2, $3, $4)
                RETURNING {_ARTICLE_COLUMNS}, 0 AS comment_count
                """,
                author,
                title,
                body,
                topic,
            )
        except asyncpg.exceptions.ForeignKeyViolationError as exc:
            table = referenced_table(exc)
            if table == "users":
                raise NotFound(USERNAME_NOT_FOUND) from exc
            if table == "topics":
                raise NotFound(TOPIC_NOT_FOUND) from exc
            raise
        if row is None:
            raise RuntimeError("Failed to insert article.")
        logger.info("article_created article_id=%s author=%s topic=%s", row["article_id"], author, topic)
        return row

    async def delete_article(self, article_id: Any) -> None:
        ident = parse_id(article_id, message=INVALID_ARTICLE_ID)
        deleted = await self.db.execute(
            """
            DELETE FROM articles
            WHERE article_id = $1
            """,
            ident,
        )
        if deleted == 0:
            raise NotFound(ARTICLE_NOT_FOUND)
        logger.info("article_deleted article_id=%s", ident)
