"""
Booking endpoints.

Plain CRUD over ``/bookings``.  Store failures are answered with a
generic, operation-specific 500 message; the detail only reaches the
server log.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from event_booking_api.app.api.deps import get_booking_service
from event_booking_api.app.core.errors import on_store_error
from event_booking_api.app.schemas.booking import BookingCreate, BookingRead, BookingUpdate
from event_booking_api.app.schemas.common import MessageResponse
from event_booking_api.app.services.booking_service import BookingService


router = APIRouter()


@router.post("", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
@on_store_error("Booking creation failed. Please try again.")
async def create_booking(
    booking: BookingCreate,
    service: BookingService = Depends(get_booking_service),
) -> BookingRead:
    """Create a booking from the submitted fields and return the stored row."""
    return await service.create_booking(booking)


@router.get("", response_model=List[BookingRead])
@on_store_error("Failed to fetch bookings.")
async def list_bookings(service: BookingService = Depends(get_booking_service)) -> List[BookingRead]:
    """List all bookings, most recent first.  No pagination."""
    return await service.list_bookings()


@router.get("/{booking_id}", response_model=BookingRead)
@on_store_error("Failed to fetch booking.")
async def get_booking(
    booking_id: int = Path(..., description="ID of the booking"),
    service: BookingService = Depends(get_booking_service),
) -> BookingRead:
    return await service.get_booking(booking_id)


@router.put("/{booking_id}", response_model=BookingRead)
@on_store_error("Failed to update booking.")
async def update_booking(
    update: BookingUpdate,
    booking_id: int = Path(..., description="ID of the booking"),
    service: BookingService = Depends(get_booking_service),
) -> BookingRead:
    """Update a booking.

    Only the fields present in the body are changed.
    """
    return await service.update_booking(booking_id, update)


@router.delete("/{booking_id}", response_model=MessageResponse)
@on_store_error("Failed to delete booking.")
async def delete_booking(
    booking_id: int = Path(..., description="ID of the booking"),
    service: BookingService = Depends(get_booking_service),
) -> MessageResponse:
    await service.delete_booking(booking_id)
    return MessageResponse(message="Booking deleted successfully")
