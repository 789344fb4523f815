"""Pydantic models for the login endpoint."""

from typing import Any, Optional

from pydantic import BaseModel, field_validator


class LoginRequest(BaseModel):
    # Optional so a missing field is answered like a wrong password.
    username: Optional[str] = None
    password: Optional[str] = None

    @field_validator("username", "password", mode="before")
    @classmethod
    def non_string_as_missing(cls, value: Any) -> Optional[str]:
        # A number or object can never match, so it fails like a wrong
        # password rather than as a malformed body.
        return value if isinstance(value, str) else None


class AuthenticatedUser(BaseModel):
    id: int
    username: str
    role: str


class LoginResponse(BaseModel):
    user: AuthenticatedUser
