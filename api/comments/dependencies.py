"""
Comments repository provider for FastAPI routes.
"""

from __future__ import annotations

from fastapi import Depends

from core.db import Database
from core.dependencies import get_db

from .repository import CommentsRepository


def get_comments_repository(db: Database = Depends(get_db)) -> CommentsRepository:
    return CommentsRepository(db)
