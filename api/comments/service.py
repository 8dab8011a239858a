"""
Comment flows that span more than one repository.
"""

from __future__ import annotations

from typing import Any

from articles.repository import ArticlesRepository

from .repository import CommentsRepository


async def comments_for_article(
    article_id: Any,
    *,
    articles: ArticlesRepository,
    comments: CommentsRepository,
) -> list[dict]:
    """
    Comments of an existing article.

    The article lookup raises NotFound for an unknown id, so an empty list
    always means "article exists, no comments yet".
    """
    await articles.get_article_by_id(article_id)
    return await comments.fetch_comments_by_article_id(article_id)
