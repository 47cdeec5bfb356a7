"""Statistics response schemas."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel

from discvault.catalog.records import MediaKind
from discvault.catalog.statistics import SpotlightRecord, StatisticsSummary


class SpotlightRead(BaseModel):
    """Record singled out by the statistics summary."""
    id: str
    title: str
    media_kind: MediaKind
    purchase_price: float = 0.0
    release_year: int = 0
    rating: float = 0.0
    purchase_date: date | None = None

    @classmethod
    def from_spotlight(cls, spotlight: SpotlightRecord | None) -> "SpotlightRead | None":
        if spotlight is None:
            return None
        return cls(
            id=spotlight.id,
            title=spotlight.title,
            media_kind=spotlight.media_kind,
            purchase_price=spotlight.purchase_price,
            release_year=spotlight.release_year,
            rating=spotlight.rating,
            purchase_date=spotlight.purchase_date,
        )


class StatisticsRead(BaseModel):
    """Full collection statistics."""
    total_blurays: int
    total_movies: int
    total_series: int
    total_seasons: int
    total_episodes: int
    total_spent: float
    average_price: float
    average_rating: float
    total_runtime_minutes: int
    physical_volume_liters: float
    physical_storage_gb: float
    genre_distribution: dict[str, int]
    tag_distribution: dict[str, int]
    year_distribution: dict[int, int]
    most_expensive: SpotlightRead | None = None
    oldest_bluray: SpotlightRead | None = None
    newest_bluray: SpotlightRead | None = None
    top_rated: list[SpotlightRead]

    @classmethod
    def from_summary(cls, summary: StatisticsSummary) -> "StatisticsRead":
        return cls(
            total_blurays=summary.total_blurays,
            total_movies=summary.total_movies,
            total_series=summary.total_series,
            total_seasons=summary.total_seasons,
            total_episodes=summary.total_episodes,
            total_spent=round(summary.total_spent, 2),
            average_price=round(summary.average_price, 2),
            average_rating=round(summary.average_rating, 2),
            total_runtime_minutes=summary.total_runtime_minutes,
            physical_volume_liters=round(summary.physical_volume_liters, 2),
            physical_storage_gb=round(summary.physical_storage_gb, 2),
            genre_distribution=dict(summary.genre_distribution),
            tag_distribution=dict(summary.tag_distribution),
            year_distribution=dict(summary.year_distribution),
            most_expensive=SpotlightRead.from_spotlight(summary.most_expensive),
            oldest_bluray=SpotlightRead.from_spotlight(summary.oldest_bluray),
            newest_bluray=SpotlightRead.from_spotlight(summary.newest_bluray),
            top_rated=[SpotlightRead.from_spotlight(item) for item in summary.top_rated],
        )


class StatisticsEnvelope(BaseModel):
    statistics: StatisticsRead


class SimplifiedStatisticsRead(BaseModel):
    """Headline totals for dashboards."""
    total_blurays: int
    total_movies: int
    total_series: int
    total_seasons: int
