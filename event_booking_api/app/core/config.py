"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  Tests
and scripts may construct ``Settings`` with explicit values instead of
relying on the process environment.
"""

import os
from dataclasses import dataclass
from typing import List


DEFAULT_ALLOWED_ORIGINS = ",".join(
    [
        "https://indatwa-cient.vercel.app",
        "https://indatwaevents.com",
        "https://www.indatwaevents.com",
    ]
)


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Event Booking API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file.  Console logging is always enabled.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database file.  A relative path is resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "event_booking.db")
    db_pool_size: int = int(os.getenv("DB_POOL_SIZE", "5"))
    # Seconds a connection waits on a locked database before failing.
    db_timeout: float = float(os.getenv("DB_TIMEOUT", "5.0"))

    # bcrypt cost factor.  10 keeps a login well under a second.
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "10"))

    # Comma-separated list of front-end origins allowed to call the API.
    # Requests without an Origin header are always accepted.
    allowed_origins: str = os.getenv("ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS)

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))

    @property
    def allowed_origin_list(self) -> List[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
