"""Disc request/response schemas."""

from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from discvault.catalog.records import MediaKind
from discvault.schema.base import ORMModel


class SeasonPayload(BaseModel):
    """One season of a series release."""
    number: int = Field(ge=0)
    episode_count: int = Field(default=0, ge=0)
    year: int | None = Field(default=None, ge=0)


class DiscBase(BaseModel):
    """Editable disc fields shared by create and read schemas."""
    release_year: int | None = Field(default=None, ge=0)
    director: str | None = None
    runtime_minutes: int | None = Field(default=None, ge=0)
    seasons: list[SeasonPayload] = Field(default_factory=list)
    description: str | None = None
    description_fr: str | None = None
    genres: list[str] = Field(default_factory=list)
    genres_fr: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    cover_image_url: str | None = None
    backdrop_url: str | None = None
    purchase_price: float = Field(default=0.0, ge=0)
    purchase_date: date | None = None
    location: str | None = None
    rating: float = Field(default=0.0, ge=0, le=10)
    tmdb_id: str | None = None
    imdb_id: str | None = None


class DiscCreate(DiscBase):
    """Payload for cataloging a new disc."""
    title: str
    media_kind: MediaKind


class DiscUpdate(BaseModel):
    """Partial update; omitted fields keep their stored values."""
    title: str | None = None
    media_kind: MediaKind | None = None
    release_year: int | None = Field(default=None, ge=0)
    director: str | None = None
    runtime_minutes: int | None = Field(default=None, ge=0)
    seasons: list[SeasonPayload] | None = None
    description: str | None = None
    description_fr: str | None = None
    genres: list[str] | None = None
    genres_fr: list[str] | None = None
    tags: list[str] | None = None
    cover_image_url: str | None = None
    backdrop_url: str | None = None
    purchase_price: float | None = Field(default=None, ge=0)
    purchase_date: date | None = None
    location: str | None = None
    rating: float | None = Field(default=None, ge=0, le=10)
    tmdb_id: str | None = None
    imdb_id: str | None = None


class DiscTagsUpdate(BaseModel):
    tags: list[str]


class DiscRead(DiscBase, ORMModel):
    """Full disc representation returned by the API."""
    id: UUID
    title: str
    media_kind: MediaKind
    seasons: list[SeasonPayload] | None = None
    genres: list[str] | None = None
    genres_fr: list[str] | None = None
    tags: list[str] | None = None
    total_episodes: int = 0
    added_by: UUID | None = None
    created_at: datetime
    updated_at: datetime


class DiscSummary(ORMModel):
    """Lightweight listing representation."""
    id: UUID
    title: str
    media_kind: MediaKind
    release_year: int | None = None
    director: str | None = None
    seasons: list[SeasonPayload] | None = None
    total_episodes: int = 0
    genres: list[str] | None = None
    cover_image_url: str | None = None
    backdrop_url: str | None = None
    rating: float = 0.0


class DiscImportReport(BaseModel):
    """Outcome of a CSV import."""
    success: int = 0
    failed: int = 0
    skipped: int = 0
    errors: list[str] = Field(default_factory=list)
