"""Read-only catalog snapshots consumed by search matching and statistics.

Invariants:
- A movie occupies one physical disc; a series occupies one disc per season,
  and at least one when no seasons are recorded.
- Season and episode totals are derived from ``seasons``, never stored.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date


class MediaKind(str, enum.Enum):
    """Kinds of cataloged discs."""
    MOVIE = "movie"
    SERIES = "series"


@dataclass(frozen=True, slots=True)
class Season:
    """One season of a series release."""
    number: int
    episode_count: int = 0
    year: int = 0


@dataclass(frozen=True, slots=True)
class CatalogRecord:
    """Immutable view of one cataloged disc."""
    id: str
    title: str
    media_kind: MediaKind
    release_year: int = 0
    director: str | None = None
    runtime_minutes: int = 0
    seasons: tuple[Season, ...] = ()
    genres: tuple[str, ...] = ()
    genres_fr: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    description: str | None = None
    description_fr: str | None = None
    purchase_price: float = 0.0
    purchase_date: date | None = None
    rating: float = 0.0

    @property
    def is_series(self) -> bool:
        return self.media_kind == MediaKind.SERIES

    @property
    def season_count(self) -> int:
        return len(self.seasons) if self.is_series else 0

    @property
    def total_episodes(self) -> int:
        if not self.is_series:
            return 0
        return sum(season.episode_count or 0 for season in self.seasons)

    @property
    def physical_units(self) -> int:
        if self.is_series:
            return max(1, len(self.seasons))
        return 1


def seasons_from_payload(payload: list[dict] | None) -> tuple[Season, ...]:
    """Build seasons from stored JSON, tolerating missing keys."""
    seasons: list[Season] = []
    for entry in payload or []:
        if not isinstance(entry, dict):
            continue
        seasons.append(
            Season(
                number=int(entry.get("number") or 0),
                episode_count=int(entry.get("episode_count") or 0),
                year=int(entry.get("year") or 0),
            )
        )
    return tuple(seasons)
