"""
Top-level package for the Event Booking API.

All functionality lives in the ``app`` subpackage, e.g.
``event_booking_api.app.main``.
"""

__all__ = []
