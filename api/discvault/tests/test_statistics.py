"""Statistics aggregator tests."""

from __future__ import annotations

from datetime import date

import pytest

from discvault.catalog.records import CatalogRecord, MediaKind, Season
from discvault.catalog.statistics import (
    TOP_RATED_LIMIT,
    SpotlightBasis,
    StatisticsOptions,
    UnknownPricePolicy,
    summarize,
)


def _movie(record_id: str, **overrides) -> CatalogRecord:
    return CatalogRecord(id=record_id, title=f"Movie {record_id}", media_kind=MediaKind.MOVIE, **overrides)


def _series(record_id: str, episodes: list[int], **overrides) -> CatalogRecord:
    seasons = tuple(Season(number=index + 1, episode_count=count) for index, count in enumerate(episodes))
    return CatalogRecord(
        id=record_id, title=f"Series {record_id}", media_kind=MediaKind.SERIES, seasons=seasons, **overrides
    )


def test_empty_collection_summary():
    summary = summarize([])

    assert summary.total_blurays == 0
    assert summary.total_movies == 0
    assert summary.total_series == 0
    assert summary.total_spent == 0
    assert summary.average_price == 0
    assert summary.average_rating == 0
    assert summary.genre_distribution == {}
    assert summary.tag_distribution == {}
    assert summary.year_distribution == {}
    assert summary.most_expensive is None
    assert summary.oldest_bluray is None
    assert summary.newest_bluray is None
    assert summary.top_rated == ()


def test_single_unrated_movie():
    summary = summarize([_movie("1", purchase_price=12.5, runtime_minutes=117)])

    assert summary.total_blurays == 1
    assert summary.total_spent == pytest.approx(12.5)
    assert summary.average_price == pytest.approx(12.5)
    assert summary.average_rating == 0
    assert summary.total_runtime_minutes == 117
    assert summary.physical_volume_liters == pytest.approx(0.3)
    assert summary.physical_storage_gb == pytest.approx(35.0)
    assert summary.top_rated == ()


def test_series_counts_seasons_as_physical_units():
    summary = summarize([_series("s", [10, 8, 12])])

    assert summary.total_seasons == 3
    assert summary.total_episodes == 30
    assert summary.total_blurays == 3
    assert summary.total_series == 1
    assert summary.physical_volume_liters == pytest.approx(0.9)
    assert summary.physical_storage_gb == pytest.approx(90.0)


def test_series_without_seasons_is_one_unit():
    summary = summarize([_series("s", [])])

    assert summary.total_blurays == 1
    assert summary.total_seasons == 0
    assert summary.total_series == 1


def test_average_price_divides_by_physical_units():
    summary = summarize([_movie("1", purchase_price=20.0), _series("s", [5, 5, 5], purchase_price=40.0)])

    assert summary.total_blurays == 4
    assert summary.average_price == pytest.approx(15.0)


def test_top_rated_is_capped_sorted_and_excludes_unrated():
    records = [_movie(str(index), rating=float(index % 7)) for index in range(20)]
    summary = summarize(records)

    ratings = [item.rating for item in summary.top_rated]
    assert len(ratings) == TOP_RATED_LIMIT
    assert ratings == sorted(ratings, reverse=True)
    assert all(rating > 0 for rating in ratings)


def test_top_rated_ties_keep_collection_order():
    summary = summarize([_movie("a", rating=8.0), _movie("b", rating=9.0), _movie("c", rating=8.0)])

    assert [item.id for item in summary.top_rated] == ["b", "a", "c"]
    assert summary.average_rating == pytest.approx(25.0 / 3)


def test_distributions_count_pairs_not_records():
    records = [
        _movie("1", genres=("Action", "Drama"), tags=("4K",), release_year=1999),
        _movie("2", genres=("Drama",), tags=("4K", "Steelbook"), release_year=1999),
        _movie("3", release_year=0),
    ]
    summary = summarize(records)

    assert summary.genre_distribution == {"Action": 1, "Drama": 2}
    assert sum(summary.genre_distribution.values()) == 3
    assert sum(summary.tag_distribution.values()) == 3
    assert summary.year_distribution == {1999: 2}


def test_most_expensive_keeps_first_on_ties():
    summary = summarize([_movie("a", purchase_price=30.0), _movie("b", purchase_price=30.0)])

    assert summary.most_expensive.id == "a"


def test_spotlight_uses_purchase_date_by_default_and_skips_missing_dates():
    records = [
        _movie("undated", release_year=1950),
        _movie("mid", purchase_date=date(2020, 5, 1), release_year=2001),
        _movie("early", purchase_date=date(2018, 1, 1), release_year=2015),
        _movie("late", purchase_date=date(2023, 3, 1), release_year=1980),
    ]
    summary = summarize(records)

    assert summary.oldest_bluray.id == "early"
    assert summary.newest_bluray.id == "late"


def test_spotlight_by_release_year():
    records = [
        _movie("undated", release_year=0),
        _movie("mid", release_year=2001),
        _movie("old", release_year=1980),
        _movie("new", release_year=2015),
    ]
    summary = summarize(records, options=StatisticsOptions(spotlight_basis=SpotlightBasis.RELEASE_YEAR))

    assert summary.oldest_bluray.id == "old"
    assert summary.newest_bluray.id == "new"


def test_spotlight_ties_keep_first_record_by_purchase_date():
    same_day = date(2021, 6, 1)
    records = [
        _movie("first", purchase_date=same_day),
        _movie("second", purchase_date=same_day),
    ]
    summary = summarize(records)

    assert summary.oldest_bluray.id == "first"
    assert summary.newest_bluray.id == "first"


def test_spotlight_ties_keep_first_record_by_release_year():
    records = [_movie("first", release_year=1999), _movie("second", release_year=1999)]
    summary = summarize(records, options=StatisticsOptions(spotlight_basis=SpotlightBasis.RELEASE_YEAR))

    assert summary.oldest_bluray.id == "first"
    assert summary.newest_bluray.id == "first"


def test_missing_price_and_rating_count_as_zero():
    records = [
        _movie("unpriced", purchase_price=None, rating=None),
        _movie("priced", purchase_price=8.0, rating=6.0),
    ]
    summary = summarize(records)

    assert summary.total_spent == pytest.approx(8.0)
    assert summary.most_expensive.id == "priced"
    assert summary.average_rating == pytest.approx(6.0)
    assert [item.id for item in summary.top_rated] == ["priced"]


def test_distributions_are_read_only():
    summary = summarize([_movie("1", genres=("Drama",), tags=("4K",), release_year=1999)])

    with pytest.raises(TypeError):
        summary.genre_distribution["Drama"] = 5
    with pytest.raises(TypeError):
        summary.tag_distribution["Steelbook"] = 1
    with pytest.raises(TypeError):
        summary.year_distribution[2000] = 1
    assert summary.genre_distribution == {"Drama": 1}


def test_unknown_price_policies():
    records = [_movie("free"), _movie("paid", purchase_price=10.0)]

    as_recorded = summarize(records)
    fallback = summarize(
        records,
        options=StatisticsOptions(unknown_price_policy=UnknownPricePolicy.FLAT_FALLBACK, unknown_price_fallback=4.0),
    )

    assert as_recorded.total_spent == pytest.approx(10.0)
    assert fallback.total_spent == pytest.approx(14.0)
    assert fallback.average_price == pytest.approx(7.0)


def test_accepts_generators():
    summary = summarize(_movie(str(index), purchase_price=1.0) for index in range(3))

    assert summary.total_movies == 3
    assert summary.total_spent == pytest.approx(3.0)


def test_summarize_is_idempotent():
    records = [
        _movie("1", purchase_price=9.99, rating=7.5, genres=("Drama",), purchase_date=date(2021, 1, 1)),
        _series("2", [6, 6], purchase_price=25.0, rating=9.0, tags=("Box",)),
    ]

    assert summarize(records) == summarize(records)
