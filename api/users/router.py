"""
User API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from .dependencies import get_users_repository
from .repository import UsersRepository

router = APIRouter()


@router.get("/users")
async def get_users(users: UsersRepository = Depends(get_users_repository)) -> dict:
    rows = await users.list_users()
    # Listing exposes usernames only.
    return {"users": [{"username": row["username"]} for row in rows]}


@router.get("/users/{username}")
async def get_user(
    username: str,
    users: UsersRepository = Depends(get_users_repository),
) -> dict:
    return {"user": await users.get_user_by_username(username)}
