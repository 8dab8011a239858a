"""
Pydantic schemas for comment endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class CommentCreateRequest(BaseModel):
    username: Any = None
    body: Any = None
