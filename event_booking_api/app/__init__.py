"""
Application package.

``main`` assembles the FastAPI app; ``core`` holds configuration,
logging, errors, the database client and password hashing;
``services`` holds the SQL and business rules per domain; ``api``
holds the HTTP routers; ``schemas`` the request and response models.
"""

from .main import app, create_app  # noqa: F401
