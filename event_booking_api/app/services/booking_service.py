"""
Business logic for event bookings.

``BookingService`` maps each booking operation to one parameterized
SQL statement (plus a read-back after writes).  There is no ownership
or approval workflow: any client may create, read, update or delete
any booking.
"""

import logging
from typing import List

from ..core.db import Database, Row
from ..core.errors import NotFoundError
from ..schemas.booking import BOOKING_FIELDS, BookingCreate, BookingRead, BookingUpdate

logger = logging.getLogger(__name__)

BOOKING_NOT_FOUND = "Booking not found"


def _to_booking(row: Row) -> BookingRead:
    return BookingRead(**row)


class BookingService:
    """Booking CRUD over the ``bookings`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def create_booking(self, data: BookingCreate) -> BookingRead:
        """Insert a booking and return the stored row, id and timestamp included."""
        values = data.model_dump(include=set(BOOKING_FIELDS))
        columns = ", ".join(BOOKING_FIELDS)
        placeholders = ", ".join("?" for _ in BOOKING_FIELDS)
        booking_id = await self.db.insert(
            f"INSERT INTO bookings ({columns}) VALUES ({placeholders})",
            [values[field] for field in BOOKING_FIELDS],
        )
        logger.info("Created booking %s", booking_id)
        return await self.get_booking(booking_id)

    async def list_bookings(self) -> List[BookingRead]:
        """Return every booking, most recent first."""
        rows = await self.db.fetch_all("SELECT * FROM bookings ORDER BY created_at DESC, id DESC")
        return [_to_booking(row) for row in rows]

    async def get_booking(self, booking_id: int) -> BookingRead:
        row = await self.db.fetch_one("SELECT * FROM bookings WHERE id = ?", (booking_id,))
        if row is None:
            raise NotFoundError(BOOKING_NOT_FOUND)
        return _to_booking(row)

    async def update_booking(self, booking_id: int, data: BookingUpdate) -> BookingRead:
        """Change the fields present in ``data``; the rest keep their values.

        An update with no fields only checks that the booking exists.
        """
        changes = data.model_dump(include=set(BOOKING_FIELDS), exclude_unset=True)
        if not changes:
            return await self.get_booking(booking_id)
        fields = [field for field in BOOKING_FIELDS if field in changes]
        assignments = ", ".join(f"{field} = ?" for field in fields)
        updated = await self.db.execute(
            f"UPDATE bookings SET {assignments} WHERE id = ?",
            [changes[field] for field in fields] + [booking_id],
        )
        if not updated:
            raise NotFoundError(BOOKING_NOT_FOUND)
        logger.info("Updated booking %s (%s)", booking_id, ", ".join(fields))
        return await self.get_booking(booking_id)

    async def delete_booking(self, booking_id: int) -> None:
        deleted = await self.db.execute("DELETE FROM bookings WHERE id = ?", (booking_id,))
        if not deleted:
            raise NotFoundError(BOOKING_NOT_FOUND)
        logger.info("Deleted booking %s", booking_id)
