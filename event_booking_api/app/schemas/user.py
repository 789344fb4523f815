"""
Pydantic models for users.

Request models accept missing or empty values so that the service can
answer with the API's own 400 messages.  No response model has a
password or hash field.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    username: Optional[str] = Field(None, examples=["alice"])
    password: Optional[str] = Field(None, examples=["Secret1!"])
    role: Optional[str] = Field(None, examples=["staff"])


class UserUpdate(BaseModel):
    """Schema for updating a user.

    ``username`` and ``role`` are required.  ``password`` may be omitted
    (or empty) to keep the current one.
    """

    username: Optional[str] = Field(None, examples=["alice"])
    password: Optional[str] = None
    role: Optional[str] = Field(None, examples=["admin"])


class UserRead(BaseModel):
    id: int
    username: str
    role: str
    created_at: datetime
