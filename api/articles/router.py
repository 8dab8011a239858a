"""
Article API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from core.schemas import VoteUpdateRequest

from . import schemas
from .dependencies import get_articles_repository
from .repository import ArticlesRepository

router = APIRouter()


@router.get("/articles")
async def get_articles(
    sort_by: str = Query(default="created_at"),
    order: str = Query(default="desc"),
    topic: str | None = Query(default=None),
    articles: ArticlesRepository = Depends(get_articles_repository),
) -> dict:
    rows = await articles.list_articles(sort_by=sort_by, order=order, topic=topic)
    return {"articles": rows}


@router.post("/articles")
async def post_article(
    request: schemas.ArticleCreateRequest | None = None,
    articles: ArticlesRepository = Depends(get_articles_repository),
) -> dict:
    request = request or schemas.ArticleCreateRequest()
    article = await articles.insert_article(
        author=request.author,
        title=request.title,
        body=request.body,
        topic=request.topic,
    )
    return {"article": article}


@router.get("/articles/{article_id}")
async def get_article(
    article_id: str,
    articles: ArticlesRepository = Depends(get_articles_repository),
) -> dict:
    return {"article": await articles.get_article_by_id(article_id)}


@router.patch("/articles/{article_id}")
async def patch_article_votes(
    article_id: str,
    request: VoteUpdateRequest | None = None,
    articles: ArticlesRepository = Depends(get_articles_repository),
) -> dict:
    inc_votes = request.inc_votes if request is not None else None
    return {"article": await articles.update_article_votes(article_id, inc_votes)}


@router.delete("/articles/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: str,
    articles: ArticlesRepository = Depends(get_articles_repository),
) -> Response:
    await articles.delete_article(article_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
