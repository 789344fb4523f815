"""
Error types shared by the data access layer, services and endpoints.

Every error the API knows how to answer derives from ``AppError`` and
carries the public ``message`` and the HTTP status code it maps to.
``StoreError`` additionally keeps a private ``detail`` that is logged
server-side and never serialized.
"""

import functools
from typing import Any, Awaitable, Callable, Optional, TypeVar

from fastapi import status

T = TypeVar("T")


class AppError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Bad request"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request body."


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid username or password"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Already exists."


class StoreError(AppError):
    """Any failure of the underlying database."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, detail: str, message: Optional[str] = None) -> None:
        super().__init__(message)
        self.detail = detail


class UniqueViolationError(StoreError):
    """A UNIQUE constraint rejected an insert or update."""


def on_store_error(message: str) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Give store failures raised by an endpoint a public ``message``.

    The wrapped coroutine keeps its signature, so FastAPI still sees the
    original parameters and dependencies.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except StoreError as exc:
                exc.message = message
                raise

        return wrapper

    return decorator
