"""
Comment API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from articles.dependencies import get_articles_repository
from articles.repository import ArticlesRepository
from core.schemas import VoteUpdateRequest

from . import schemas, service
from .dependencies import get_comments_repository
from .repository import CommentsRepository

router = APIRouter()


@router.get("/articles/{article_id}/comments")
async def get_article_comments(
    article_id: str,
    articles: ArticlesRepository = Depends(get_articles_repository),
    comments: CommentsRepository = Depends(get_comments_repository),
) -> dict:
    rows = await service.comments_for_article(article_id, articles=articles, comments=comments)
    return {"comments": rows}


@router.post("/articles/{article_id}/comments")
async def post_article_comment(
    article_id: str,
    request: schemas.CommentCreateRequest | None = None,
    comments: CommentsRepository = Depends(get_comments_repository),
) -> dict:
    request = request or schemas.CommentCreateRequest()
    comment = await comments.insert_comment(article_id, author=request.username, body=request.body)
    return {"comment": comment}


@router.patch("/comments/{comment_id}")
async def patch_comment_votes(
    comment_id: str,
    request: VoteUpdateRequest | None = None,
    comments: CommentsRepository = Depends(get_comments_repository),
) -> dict:
    inc_votes = request.inc_votes if request is not None else None
    return {"comment": await comments.update_comment_votes(comment_id, inc_votes)}


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: str,
    comments: CommentsRepository = Depends(get_comments_repository),
) -> Response:
    await comments.remove_comment(comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
