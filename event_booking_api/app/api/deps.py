"""
FastAPI dependencies providing the store client and services.

The ``Database`` and ``PasswordHasher`` live on ``app.state`` (set up by
``main.create_app``); handlers never import them from module scope.
"""

from fastapi import Depends, Request

from event_booking_api.app.core.db import Database
from event_booking_api.app.core.security import PasswordHasher
from event_booking_api.app.services.auth_service import AuthService
from event_booking_api.app.services.booking_service import BookingService
from event_booking_api.app.services.user_service import UserService


def get_db(request: Request) -> Database:
    return request.app.state.db


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_booking_service(db: Database = Depends(get_db)) -> BookingService:
    return BookingService(db)


def get_user_service(
    db: Database = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
) -> UserService:
    return UserService(db, hasher)


def get_auth_service(
    db: Database = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
) -> AuthService:
    return AuthService(db, hasher)
