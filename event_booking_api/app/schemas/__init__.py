"""
Pydantic schema definitions for API payloads.

Each domain (users, bookings, auth) defines its own request and
response models.  Schemas are separated from the SQL in the services
to decouple the API representation from persistence.
"""
