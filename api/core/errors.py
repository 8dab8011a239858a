"""
Domain error signals raised by repositories.

`main.py` translates them into `{"msg": ...}` JSON responses carrying
`status_code`.
"""

from __future__ import annotations

from fastapi import status


class ApiError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
