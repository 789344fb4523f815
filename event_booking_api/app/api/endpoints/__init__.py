"""
Endpoint modules.

Each module defines an ``APIRouter`` for one domain (auth, bookings,
users).  The routers are aggregated in ``api/router.py``.
"""
