"""
Pydantic models for song data.

``SongWrite`` is the body of both create and update requests: an
update always replaces title, singer and year together.  ``SongRead``
is what the API returns and what the client session keeps in memory.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class SongWrite(BaseModel):
    """Schema for creating or updating a song.

    Fields are untyped.  ``SongService`` validates them only after the
    existence and ownership checks, which therefore take precedence.
    """

    title: Any = Field(None, examples=["Imagine"])
    singer: Any = Field(None, examples=["John Lennon"])
    year: Any = Field(None, examples=[1971])


class SongRead(BaseModel):
    """Schema for reading a song from the API."""

    id: str
    title: str
    singer: str
    year: int
    owner_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True,
    }


class MessageResponse(BaseModel):
    message: str
