"""
Articles repository provider for FastAPI routes.
"""

from __future__ import annotations

from fastapi import Depends

from core.db import Database
from core.dependencies import get_db

from .repository import ArticlesRepository


def get_articles_repository(db: Database = Depends(get_db)) -> ArticlesRepository:
    return ArticlesRepository(db)
