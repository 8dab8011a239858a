from unittest.mock import AsyncMock

import asyncpg
import pytest
from fastapi.testclient import TestClient

from core.db import Database
from core.dependencies import get_db


def fk_violation(table: str) -> asyncpg.exceptions.ForeignKeyViolationError:
    exc = asyncpg.exceptions.ForeignKeyViolationError(
        "insert or update on table violates foreign key constraint"
    )
    exc.detail = f'Key (ref)=(missing) is not present in table "{table}".'
    return exc


@pytest.fixture
def db():
    """Stand-in store handle; configure fetch_one/fetch_all/execute per test."""
    return AsyncMock(spec=Database)


@pytest.fixture
def client(db):
    import main

    main.app.dependency_overrides[get_db] = lambda: db
    try:
        # Not entered as a context manager, so the lifespan never opens a real pool.
        yield TestClient(main.app, raise_server_exceptions=False)
    finally:
        main.app.dependency_overrides.clear()
