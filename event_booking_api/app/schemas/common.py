"""Models shared by several endpoints."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Confirmation body returned by the delete endpoints."""

    message: str
