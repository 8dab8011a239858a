"""
Dependencies shared by every feature router.
"""

from __future__ import annotations

from fastapi import Request

from .db import Database


def get_db(request: Request) -> Database:
    """
    The store handle opened by the application lifespan.
    """
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Database handle is not initialized. Start the app through its lifespan.")
    return db
