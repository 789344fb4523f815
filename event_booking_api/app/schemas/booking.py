"""
Pydantic models for event bookings.

The booking form on the public site posts ``eventType``, ``date`` and
``time``; the stored columns are ``event_type``, ``event_date`` and
``event_time``.  Both spellings are accepted on input, responses always
use the column names.
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# Columns a client may write, in storage order.
BOOKING_FIELDS = (
    "name",
    "email",
    "phone",
    "service",
    "event_type",
    "event_date",
    "event_time",
    "location",
    "guests",
    "duration",
    "notes",
)


class BookingFields(BaseModel):
    """Every writable booking field, all optional.

    Nothing beyond the types is checked here: name, email and phone are
    enforced by the table schema only.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = Field(None, examples=["Jane Doe"])
    email: Optional[str] = Field(None, examples=["jane@example.com"])
    phone: Optional[str] = Field(None, examples=["+250788000000"])
    service: Optional[str] = Field(None, examples=["Decoration"])
    event_type: Optional[str] = Field(
        None, validation_alias=AliasChoices("event_type", "eventType"), examples=["Wedding"]
    )
    event_date: Optional[str] = Field(
        None, validation_alias=AliasChoices("event_date", "date"), examples=["2025-08-16"]
    )
    event_time: Optional[str] = Field(
        None, validation_alias=AliasChoices("event_time", "time"), examples=["14:00"]
    )
    location: Optional[str] = Field(None, examples=["Kigali"])
    guests: Optional[int] = Field(None, examples=[150])
    duration: Optional[Union[int, float, str]] = Field(None, examples=["5 hours"])
    notes: Optional[str] = None


class BookingCreate(BookingFields):
    """Schema for creating a booking.  Omitted fields are stored as NULL."""


class BookingUpdate(BookingFields):
    """Schema for updating a booking.

    Only the fields present in the request body are written; omitted
    fields keep their stored values.  Use ``model_dump(exclude_unset=True)``
    to obtain the changes.
    """


class BookingRead(BaseModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    service: Optional[str] = None
    event_type: Optional[str] = None
    event_date: Optional[str] = None
    event_time: Optional[str] = None
    location: Optional[str] = None
    guests: Optional[int] = None
    duration: Optional[Union[int, float, str]] = None
    notes: Optional[str] = None
    created_at: datetime
