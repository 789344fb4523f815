"""
Top-level router of the API.

Aggregates the domain routers.  ``main.create_app`` mounts it under
``/api``.
"""

from fastapi import APIRouter

from .endpoints import auth, bookings, users

router = APIRouter()

# auth defines "/login" itself, so it gets no prefix.
router.include_router(auth.router, tags=["auth"])
router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
router.include_router(users.router, prefix="/users", tags=["users"])
