"""
Users repository provider for FastAPI routes.
"""

from __future__ import annotations

from fastapi import Depends

from core.db import Database
from core.dependencies import get_db

from .repository import UsersRepository


def get_users_repository(db: Database = Depends(get_db)) -> UsersRepository:
    return UsersRepository(db)
