"""
Pydantic schemas for article endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ArticleCreateRequest(BaseModel):
    # Presence and type are checked by the repository; unknown keys are ignored.
    author: Any = None
    title: Any = None
    body: Any = None
    topic: Any = None
