"""Tag request/response schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from discvault.schema.base import ORMModel

HEX_COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}){1,2}$"


class TagCreate(BaseModel):
    """Payload for creating a new tag."""
    name: str = Field(min_length=1, max_length=64)
    color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    description: str | None = Field(default=None, max_length=500)


class TagUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=64)
    color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    description: str | None = Field(default=None, max_length=500)


class TagRead(ORMModel):
    """Tag representation returned by the API."""
    id: UUID
    name: str
    color: str | None = None
    description: str | None = None
    created_by: UUID | None = None
    created_at: datetime
