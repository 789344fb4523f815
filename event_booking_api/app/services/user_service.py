"""
Business logic for users.

Usernames are unique.  The UNIQUE index on ``users.username`` is the
only uniqueness check: a violation on insert or update becomes a
``ConflictError``, so two concurrent requests for the same username
cannot both succeed and neither gets a 500.  Password hashes are never
selected into a response.
"""

import logging
from typing import List, Optional

from ..core.db import Database
from ..core.errors import ConflictError, NotFoundError, UniqueViolationError, ValidationError
from ..core.security import PasswordHasher
from ..schemas.user import UserCreate, UserRead, UserUpdate

logger = logging.getLogger(__name__)

USER_COLUMNS = "id, username, role, created_at"
USER_NOT_FOUND = "User not found"


class UserService:
    """User CRUD over the ``users`` table."""

    def __init__(self, db: Database, hasher: PasswordHasher) -> None:
        self.db = db
        self.hasher = hasher

    async def list_users(self) -> List[UserRead]:
        """Return all users, most recently created first."""
        rows = await self.db.fetch_all(f"SELECT {USER_COLUMNS} FROM users ORDER BY created_at DESC, id DESC")
        return [UserRead(**row) for row in rows]

    async def get_user(self, user_id: int) -> UserRead:
        row = await self.db.fetch_one(f"SELECT {USER_COLUMNS} FROM users WHERE id = ?", (user_id,))
        if row is None:
            raise NotFoundError(USER_NOT_FOUND)
        return UserRead(**row)

    async def create_user(self, data: UserCreate) -> UserRead:
        """Hash the password and insert the user.

        Raises ``ValidationError`` if a field is missing or empty and
        ``ConflictError`` if the username is taken.
        """
        if not (data.username and data.password and data.role):
            raise ValidationError("Username, password, and role are required.")
        password_hash = await self.hasher.hash_async(data.password)
        try:
            user_id = await self.db.insert(
                "INSERT INTO users (username, password_hash, role) VALUES (?, ?, ?)",
                (data.username, password_hash, data.role),
            )
        except UniqueViolationError:
            raise ConflictError("Username already exists.") from None
        logger.info("Created user %s (%s)", user_id, data.username)
        return await self.get_user(user_id)

    async def update_user(self, user_id: int, data: UserUpdate) -> UserRead:
        """Replace username and role, and the password if one is given.

        Without a password the stored hash is left untouched.
        """
        if not (data.username and data.role):
            raise ValidationError("Username and role are required.")
        password_hash: Optional[str] = None
        if data.password:
            password_hash = await self.hasher.hash_async(data.password)

        if password_hash is None:
            sql = "UPDATE users SET username = ?, role = ? WHERE id = ?"
            params: tuple = (data.username, data.role, user_id)
        else:
            sql = "UPDATE users SET username = ?, password_hash = ?, role = ? WHERE id = ?"
            params = (data.username, password_hash, data.role, user_id)
        try:
            updated = await self.db.execute(sql, params)
        except UniqueViolationError:
            raise ConflictError("Username already taken by another user.") from None
        if not updated:
            raise NotFoundError(USER_NOT_FOUND)
        logger.info("Updated user %s%s", user_id, " (password changed)" if password_hash else "")
        return await self.get_user(user_id)

    async def delete_user(self, user_id: int) -> None:
        """Delete a user permanently."""
        deleted = await self.db.execute("DELETE FROM users WHERE id = ?", (user_id,))
        if not deleted:
            raise NotFoundError(USER_NOT_FOUND)
        logger.info("Deleted user %s", user_id)
