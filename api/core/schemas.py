"""
Request bodies shared across features.

Fields are typed loosely on purpose: the repositories own the checks and the
error messages, so malformed values must reach them untouched.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class VoteUpdateRequest(BaseModel):
    inc_votes: Any = None
