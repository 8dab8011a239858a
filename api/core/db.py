"""
Async database access (raw SQL) using asyncpg.

`Database` is the store handle: it owns one connection pool and is handed to
every repository at construction. FastAPI opens it on startup and closes it
on shutdown (see `api/main.py`); tests build their own.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import settings

logger = logging.getLogger(__name__)


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = settings.env_str("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


_FK_TABLE_RE = re.compile(r'table "([^"]+)"')


def referenced_table(exc: asyncpg.exceptions.ForeignKeyViolationError) -> str | None:
    """
    Name of the table a failed foreign key points at.

    Postgres reports it in the detail line:
    `Key (author)=(x) is not present in table "users".`
    """
    match = _FK_TABLE_RE.search(exc.detail or "")
    return match.group(1) if match else None


def _affected_rows(status: str) -> int:
    """
    Parse the row count out of a command tag ("DELETE 3", "INSERT 0 1").
    """
    tail = (status or "").rsplit(" ", 1)[-1]
    return int(tail) if tail.isdigit() else 0


class Database:
    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool: asyncpg.Pool | None = pool

    @classmethod
    async def connect(
        cls,
        dsn: str | None = None,
        *,
        min_size: int | None = None,
        max_size: int | None = None,
        command_timeout: float | None = None,
    ) -> Database:
        pool = await asyncpg.create_pool(
            dsn=_sanitize_database_url(dsn) if dsn else database_url(),
            min_size=min_size if min_size is not None else settings.env_int("DB_POOL_MIN_SIZE", 1),
            max_size=max_size if max_size is not None else settings.env_int("DB_POOL_MAX_SIZE", 5),
            command_timeout=(
                command_timeout
                if command_timeout is not None
                else settings.env_float("DB_COMMAND_TIMEOUT", 30.0)
            ),
        )
        logger.info("db_pool_opened min_size=%s max_size=%s", pool.get_min_size(), pool.get_max_size())
        return cls(pool)

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None
        logger.info("db_pool_closed")

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("Database handle is closed.")
        return self._pool

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        row = await self.pool.fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        rows = await self.pool.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> int:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL) and return the affected row count.
        """
        status = await self.pool.execute(sql, *args)
        return _affected_rows(status)
