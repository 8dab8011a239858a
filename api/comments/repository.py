"""
Comment persistence (raw SQL).
"""

from __future__ import annotations

import logging
from typing import Any

import asyncpg

from core.db import Database, referenced_table
from core.errors import InvalidInput, NotFound
from core.validation import INVALID_INC_VOTES, parse_id, parse_inc_votes, require_fields

logger = logging.getLogger(__name__)

INVALID_ARTICLE_ID = "Invalid article ID"
INVALID_COMMENT_ID = "Invalid comment ID"
ARTICLE_NOT_FOUND = "Article ID not found"
COMMENT_NOT_FOUND = "Comment ID not found"
USERNAME_NOT_FOUND = "Username not found"

_COMMENT_COLUMNS = "comment_id, article_id, author, body, votes, created_at"


class CommentsRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def fetch_comments_by_article_id(self, article_id: Any) -> list[dict]:
        """
        Comments for one article, newest first.

        Does not check that the article exists; an unknown id yields [].
        """
        ident = parse_id(article_id, message=INVALID_ARTICLE_ID)
        return await self.db.fetch_all(
            f"""
            SELECT {_COMMENT_COLUMNS}
            FROM comments
            WHERE article_id = $1
            ORDER BY created_at DESC, comment_id DESC
            """,
            ident,
        )

    async def insert_comment(self, article_id: Any, *, author: Any, body: Any) -> dict:
        ident = parse_id(article_id, message=INVALID_ARTICLE_ID)
        require_fields(author=author, body=body)
        try:
            row = await self.db.fetch_one(
                f"""
                INSERT INTO comments (article_id, author, body)
                VALUES ($1, $2, $3)
                RETURNING {_COMMENT_COLUMNS}
                """,
                ident,
                author,
                body,
            )
        except asyncpg.exceptions.ForeignKeyViolationError as exc:
            table = referenced_table(exc)
            if table == "users":
                raise NotFound(USERNAME_NOT_FOUND) from exc
            if table == "articles":
                raise NotFound(ARTICLE_NOT_FOUND) from exc
            raise
        if row is None:
            raise RuntimeError("Failed to insert comment.")
        logger.info("comment_created comment_id=%s article_id=%s author=%s", row["comment_id"], ident, author)
        return row

    async def remove_comment(self, comment_id: Any) -> None:
        ident = parse_id(comment_id, message=INVALID_COMMENT_ID)
        deleted = await self.db.execute(
            """
            DELETE FROM comments
            WHERE comment_id = $1
            """,
            ident,
        )
        if deleted == 0:
            raise NotFound(COMMENT_NOT_FOUND)
        logger.info("comment_deleted comment_id=%s", ident)

    async def update_comment_votes(self, comment_id: Any, inc_votes: Any) -> dict:
        ident = parse_id(comment_id, message=INVALID_COMMENT_ID)
        delta = parse_inc_votes(inc_votes)
        try:
            row = await self.db.fetch_one(
                f"""
                UPDATE comments
                SET votes = votes + $2
                WHERE comment_id = $1
                RETURNING {_COMMENT_COLUMNS}
                """,
                ident,
                delta,
            )
        except asyncpg.exceptions.NumericValueOutOfRangeError as exc:
            raise InvalidInput(INVALID_INC_VOTES) from exc
        if row is None:
            raise NotFound(COMMENT_NOT_FOUND)
        return row
