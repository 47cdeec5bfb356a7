"""Single-pass collection statistics.

Invariants:
- ``total_blurays`` counts physical discs; ``total_movies``/``total_series``
  count records. Average price divides by physical discs.
- Ratings of 0 mean "unrated" and never reach the average or the top list.
- Spotlight ties keep the first record seen in collection order.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Iterable, Mapping

from discvault.catalog.records import CatalogRecord, MediaKind

MOVIE_VOLUME_LITERS = 0.3
SEASON_VOLUME_LITERS = 0.3
MOVIE_STORAGE_GB = 35.0
SEASON_STORAGE_GB = 30.0
TOP_RATED_LIMIT = 10
DEFAULT_UNKNOWN_PRICE_FALLBACK = 4.0


class UnknownPricePolicy(str, enum.Enum):
    """How a purchase price of 0 contributes to total spend."""
    AS_RECORDED = "as_recorded"
    FLAT_FALLBACK = "flat_fallback"


class SpotlightBasis(str, enum.Enum):
    """Which value orders the oldest/newest spotlight records."""
    PURCHASE_DATE = "purchase_date"
    RELEASE_YEAR = "release_year"


@dataclass(frozen=True, slots=True)
class StatisticsOptions:
    """Tunable accumulation policies."""
    unknown_price_policy: UnknownPricePolicy = UnknownPricePolicy.AS_RECORDED
    unknown_price_fallback: float = DEFAULT_UNKNOWN_PRICE_FALLBACK
    spotlight_basis: SpotlightBasis = SpotlightBasis.PURCHASE_DATE


DEFAULT_OPTIONS = StatisticsOptions()


@dataclass(frozen=True, slots=True)
class SpotlightRecord:
    """Compact description of a record singled out by the summary."""
    id: str
    title: str
    media_kind: MediaKind
    purchase_price: float = 0.0
    release_year: int = 0
    rating: float = 0.0
    purchase_date: date | None = None

    @classmethod
    def from_record(cls, record: CatalogRecord) -> "SpotlightRecord":
        return cls(
            id=record.id,
            title=record.title,
            media_kind=record.media_kind,
            purchase_price=record.purchase_price,
            release_year=record.release_year,
            rating=record.rating,
            purchase_date=record.purchase_date,
        )


@dataclass(frozen=True, slots=True)
class StatisticsSummary:
    """Aggregate view of a whole collection.

    Distributions are read-only mappings; copy them before mutating.
    """
    total_blurays: int = 0
    total_movies: int = 0
    total_series: int = 0
    total_seasons: int = 0
    total_episodes: int = 0
    total_spent: float = 0.0
    average_price: float = 0.0
    average_rating: float = 0.0
    total_runtime_minutes: int = 0
    physical_volume_liters: float = 0.0
    physical_storage_gb: float = 0.0
    genre_distribution: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    tag_distribution: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    year_distribution: Mapping[int, int] = field(default_factory=lambda: MappingProxyType({}))
    most_expensive: SpotlightRecord | None = None
    oldest_bluray: SpotlightRecord | None = None
    newest_bluray: SpotlightRecord | None = None
    top_rated: tuple[SpotlightRecord, ...] = ()


def _spotlight_key(record: CatalogRecord, basis: SpotlightBasis) -> date | int | None:
    if basis == SpotlightBasis.RELEASE_YEAR:
        return record.release_year if record.release_year > 0 else None
    return record.purchase_date


def _spent_for(price: float, options: StatisticsOptions) -> float:
    if price <= 0 and options.unknown_price_policy == UnknownPricePolicy.FLAT_FALLBACK:
        return options.unknown_price_fallback
    return price


def summarize(
    records: Iterable[CatalogRecord], *, options: StatisticsOptions = DEFAULT_OPTIONS
) -> StatisticsSummary:
    """Fold every record into a statistics summary in one pass.

    Implementation notes:
    - Accepts any iterable, so callers may stream records instead of
      materializing the collection.
    - Oldest/newest compare on ``options.spotlight_basis``; records without a
      value for that basis are not candidates.
    """
    total_blurays = 0
    total_movies = 0
    total_series = 0
    total_seasons = 0
    total_episodes = 0
    total_spent = 0.0
    total_runtime = 0
    volume_liters = 0.0
    storage_gb = 0.0
    rating_sum = 0.0
    rating_count = 0
    genre_counts: dict[str, int] = {}
    tag_counts: dict[str, int] = {}
    year_counts: dict[int, int] = {}
    rated: list[CatalogRecord] = []

    most_expensive: CatalogRecord | None = None
    most_expensive_price = 0.0
    oldest: CatalogRecord | None = None
    oldest_key: date | int | None = None
    newest: CatalogRecord | None = None
    newest_key: date | int | None = None

    for record in records:
        total_blurays += record.physical_units
        if record.is_series:
            total_series += 1
            seasons = len(record.seasons)
            total_seasons += seasons
            total_episodes += record.total_episodes
            volume_liters += seasons * SEASON_VOLUME_LITERS
            storage_gb += seasons * SEASON_STORAGE_GB
        else:
            total_movies += 1
            volume_liters += MOVIE_VOLUME_LITERS
            storage_gb += MOVIE_STORAGE_GB
            if record.runtime_minutes > 0:
                total_runtime += record.runtime_minutes

        price = record.purchase_price or 0.0
        total_spent += _spent_for(price, options)

        if most_expensive is None or price > most_expensive_price:
            most_expensive, most_expensive_price = record, price

        key = _spotlight_key(record, options.spotlight_basis)
        if key is not None:
            if oldest_key is None or key < oldest_key:
                oldest, oldest_key = record, key
            if newest_key is None or key > newest_key:
                newest, newest_key = record, key

        rating = record.rating or 0.0
        if rating > 0:
            rating_sum += rating
            rating_count += 1
            rated.append(record)

        for genre in record.genres:
            genre_counts[genre] = genre_counts.get(genre, 0) + 1
        for tag in record.tags:
            tag_counts[tag] = tag_counts.get(tag, 0) + 1
        if record.release_year > 0:
            year_counts[record.release_year] = year_counts.get(record.release_year, 0) + 1

    top_rated = sorted(rated, key=lambda item: item.rating, reverse=True)[:TOP_RATED_LIMIT]

    return StatisticsSummary(
        total_blurays=total_blurays,
        total_movies=total_movies,
        total_series=total_series,
        total_seasons=total_seasons,
        total_episodes=total_episodes,
        total_spent=total_spent,
        average_price=total_spent / total_blurays if total_blurays else 0.0,
        average_rating=rating_sum / rating_count if rating_count else 0.0,
        total_runtime_minutes=total_runtime,
        physical_volume_liters=volume_liters,
        physical_storage_gb=storage_gb,
        genre_distribution=MappingProxyType(genre_counts),
        tag_distribution=MappingProxyType(tag_counts),
        year_distribution=MappingProxyType(year_counts),
        most_expensive=SpotlightRecord.from_record(most_expensive) if most_expensive else None,
        oldest_bluray=SpotlightRecord.from_record(oldest) if oldest else None,
        newest_bluray=SpotlightRecord.from_record(newest) if newest else None,
        top_rated=tuple(SpotlightRecord.from_record(record) for record in top_rated),
    )
