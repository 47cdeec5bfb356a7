"""Disc catalog model: one row per owned physical release."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import JSON, Date, DateTime, Enum, Float, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from discvault.catalog.records import MediaKind
from discvault.db.base_class import Base

JSON_COMPATIBLE = JSON().with_variant(JSONB, "postgresql")


class Disc(Base):
    """Cataloged movie or series release."""
    __tablename__ = "discs"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    # Persist the enum values (lowercase) instead of names (uppercase) so they match the DB enum
    media_kind: Mapped[MediaKind] = mapped_column(
        Enum(MediaKind, name="media_kind", values_callable=lambda enum_cls: [e.value for e in enum_cls]),
        nullable=False,
    )
    release_year: Mapped[int | None] = mapped_column(Integer)
    director: Mapped[str | None] = mapped_column(String(255))
    runtime_minutes: Mapped[int | None] = mapped_column(Integer)
    seasons: Mapped[list[dict] | None] = mapped_column(JSON_COMPATIBLE, default=list)

    description: Mapped[str | None] = mapped_column(Text)
    description_fr: Mapped[str | None] = mapped_column(Text)
    genres: Mapped[list[str] | None] = mapped_column(JSON_COMPATIBLE, default=list)
    genres_fr: Mapped[list[str] | None] = mapped_column(JSON_COMPATIBLE, default=list)
    tags: Mapped[list[str] | None] = mapped_column(JSON_COMPATIBLE, default=list)

    cover_image_url: Mapped[str | None] = mapped_column(String(1024))
    backdrop_url: Mapped[str | None] = mapped_column(String(1024))
    purchase_price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    purchase_date: Mapped[date | None] = mapped_column(Date)
    location: Mapped[str | None] = mapped_column(String(255))
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    tmdb_id: Mapped[str | None] = mapped_column(String(32), index=True)
    imdb_id: Mapped[str | None] = mapped_column(String(32))

    added_by: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL")
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow
    )

    @property
    def total_episodes(self) -> int:
        if self.media_kind != MediaKind.SERIES:
            return 0
        return sum(int(season.get("episode_count") or 0) for season in self.seasons or [])
