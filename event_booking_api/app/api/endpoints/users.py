"""
User management endpoints.

List, create, update and delete staff accounts.  Responses never
include the password hash.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from event_booking_api.app.api.deps import get_user_service
from event_booking_api.app.core.errors import on_store_error
from event_booking_api.app.schemas.common import MessageResponse
from event_booking_api.app.schemas.user import UserCreate, UserRead, UserUpdate
from event_booking_api.app.services.user_service import UserService


router = APIRouter()


@router.get("", response_model=List[UserRead])
@on_store_error("Failed to fetch users.")
async def list_users(service: UserService = Depends(get_user_service)) -> List[UserRead]:
    """List all users, newest first."""
    return await service.list_users()


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
@on_store_error("Failed to create user.")
async def create_user(
    user: UserCreate,
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Create a user.

    ``username``, ``password`` and ``role`` are required (400).  A taken
    username is answered with 409.
    """
    return await service.create_user(user)


@router.put("/{user_id}", response_model=UserRead)
@on_store_error("Failed to update user.")
async def update_user(
    body: UserUpdate,
    user_id: int = Path(..., description="ID of the user"),
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Update username and role; the password only when one is supplied."""
    return await service.update_user(user_id, body)


@router.delete("/{user_id}", response_model=MessageResponse)
@on_store_error("Failed to delete user.")
async def delete_user(
    user_id: int = Path(..., description="ID of the user"),
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    await service.delete_user(user_id)
    return MessageResponse(message="User deleted successfully")
