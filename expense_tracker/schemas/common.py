"""Shared response schemas."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Outcome flag with a human-readable message."""

    success: bool = True
    message: str
