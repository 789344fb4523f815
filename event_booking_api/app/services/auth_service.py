"""
Credential verification for the login endpoint.

An unknown username and a wrong password fail identically: same
exception, same message, and the same bcrypt work, because a dummy
verify runs when no user row exists.
"""

import logging

from ..core.db import Database
from ..core.errors import AuthError
from ..core.security import PasswordHasher
from ..schemas.auth import AuthenticatedUser, LoginRequest

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


class AuthService:
    def __init__(self, db: Database, hasher: PasswordHasher) -> None:
        self.db = db
        self.hasher = hasher

    async def authenticate(self, credentials: LoginRequest) -> AuthenticatedUser:
        """Return the identity of the user or raise ``AuthError``."""
        username = credentials.username or ""
        password = credentials.password or ""
        row = await self.db.fetch_one(
            "SELECT id, username, role, password_hash FROM users WHERE username = ?",
            (username,),
        )
        if row is None:
            await self.hasher.dummy_verify_async(password)
            logger.info("Failed login for unknown user")
            raise AuthError(INVALID_CREDENTIALS)
        if not await self.hasher.verify_async(password, row["password_hash"]):
            logger.info("Failed login for user %s", row["id"])
            raise AuthError(INVALID_CREDENTIALS)
        return AuthenticatedUser(id=row["id"], username=row["username"], role=row["role"])
