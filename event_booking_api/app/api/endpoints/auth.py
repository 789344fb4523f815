"""
Login endpoint.

Checks a username/password pair and returns the user's id, username
and role.  No token or session is issued.
"""

from fastapi import APIRouter, Depends

from event_booking_api.app.api.deps import get_auth_service
from event_booking_api.app.core.errors import on_store_error
from event_booking_api.app.schemas.auth import LoginRequest, LoginResponse
from event_booking_api.app.services.auth_service import AuthService


router = APIRouter()


@router.post("/login", response_model=LoginResponse)
@on_store_error("Server error")
async def login(
    credentials: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """Check a username/password pair.

    Both an unknown username and a wrong password give the same 401.
    """
    user = await service.authenticate(credentials)
    return LoginResponse(user=user)
