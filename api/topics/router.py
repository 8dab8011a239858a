"""
Topic API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from .dependencies import get_topics_repository
from .repository import TopicsRepository

router = APIRouter()


@router.get("/topics")
async def get_topics(topics: TopicsRepository = Depends(get_topics_repository)) -> dict:
    return {"topics": await topics.list_topics()}
