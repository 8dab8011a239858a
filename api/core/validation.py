"""
Pure input checks shared by the repositories.

Every check either returns the normalized value or raises `InvalidInput`.
"""

from __future__ import annotations

from typing import Any

from .errors import InvalidInput

# Upper bound of a Postgres `integer` / `serial` column.
MAX_ID = 2_147_483_647
MIN_VOTES_DELTA = -MAX_ID - 1

ARTICLE_SORT_COLUMNS = ("author", "title", "article_id", "topic", "created_at", "votes")
SORT_ORDERS = ("asc", "desc")

MISSING_INC_VOTES = "Missing inc_votes data in request body"
INVALID_INC_VOTES = "Invalid inc_votes data in request body"
MISSING_BODY_DATA = "Missing data in request body"


def parse_id(value: Any, *, message: str) -> int:
    """
    Accept an int or a string of ASCII digits denoting 1..MAX_ID.
    """
    if isinstance(value, bool):
        raise InvalidInput(message)
    if isinstance(value, int):
        ident = value
    elif isinstance(value, str) and value.isascii() and value.isdigit():
        ident = int(value)
    else:
        raise InvalidInput(message)

    if not 1 <= ident <= MAX_ID:
        raise InvalidInput(message)
    return ident


def parse_inc_votes(inc_votes: Any) -> int:
    # Falsy (including an explicit 0) counts as missing.
    if not inc_votes:
        raise InvalidInput(MISSING_INC_VOTES)
    if isinstance(inc_votes, bool):
        raise InvalidInput(INVALID_INC_VOTES)
    if isinstance(inc_votes, int):
        delta = inc_votes
    elif isinstance(inc_votes, float) and inc_votes.is_integer():
        delta = int(inc_votes)
    else:
        raise InvalidInput(INVALID_INC_VOTES)

    # The delta is bound as a Postgres `integer`.
    if not MIN_VOTES_DELTA <= delta <= MAX_ID:
        raise InvalidInput(INVALID_INC_VOTES)
    return delta


def check_sort_by(sort_by: str) -> str:
    if sort_by not in ARTICLE_SORT_COLUMNS:
        raise InvalidInput("Invalid sort_by query")
    return sort_by


def check_order(order: str) -> str:
    if order not in SORT_ORDERS:
        raise InvalidInput("Invalid order query")
    return order


def require_fields(**fields: Any) -> None:
    """
    Every field must be a non-blank string without NUL characters.
    """
    for value in fields.values():
        if not isinstance(value, str) or not value.strip() or not storable_text(value):
            raise InvalidInput(MISSING_BODY_DATA)


def storable_text(value: str) -> bool:
    """
    Postgres text columns cannot hold NUL characters.
    """
    return "\x00" not in value
