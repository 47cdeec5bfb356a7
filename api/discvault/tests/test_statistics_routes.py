"""Statistics endpoint tests."""

from __future__ import annotations

import pytest

from discvault.catalog.statistics import SpotlightBasis, StatisticsOptions, UnknownPricePolicy
from discvault.core.config import settings
from discvault.tests.utils import API, install_admin, register_and_login


async def _seed(client, headers):
    discs = [
        {"title": "Alien", "media_kind": "movie", "release_year": 1979, "purchase_price": 10.0, "rating": 8.0,
         "genres": ["Horror"], "tags": ["Classic"], "purchase_date": "2021-06-01", "runtime_minutes": 117},
        {"title": "Heat", "media_kind": "movie", "release_year": 1995, "rating": 9.0,
         "genres": ["Crime", "Drama"], "purchase_date": "2019-02-10", "runtime_minutes": 170},
        {"title": "The Wire", "media_kind": "series", "release_year": 2002, "purchase_price": 50.0,
         "seasons": [{"number": 1, "episode_count": 13}, {"number": 2, "episode_count": 12}]},
    ]
    for disc in discs:
        res = await client.post(f"{API}/discs", json=disc, headers=headers)
        assert res.status_code == 201


@pytest.mark.asyncio
async def test_statistics_envelope(client):
    admin = await install_admin(client)
    await _seed(client, admin.headers)
    member = await register_and_login(client)

    res = await client.get(f"{API}/statistics", headers=member.headers)
    assert res.status_code == 200
    stats = res.json()["statistics"]

    assert stats["total_blurays"] == 4
    assert stats["total_movies"] == 2
    assert stats["total_series"] == 1
    assert stats["total_seasons"] == 2
    assert stats["total_episodes"] == 25
    assert stats["total_spent"] == 60.0
    assert stats["average_price"] == 15.0
    assert stats["average_rating"] == 8.5
    assert stats["total_runtime_minutes"] == 287
    assert stats["physical_volume_liters"] == 1.2
    assert stats["physical_storage_gb"] == 130.0
    assert stats["genre_distribution"] == {"Horror": 1, "Crime": 1, "Drama": 1}
    assert stats["tag_distribution"] == {"Classic": 1}
    assert stats["year_distribution"] == {"1979": 1, "1995": 1, "2002": 1}
    assert stats["most_expensive"]["title"] == "The Wire"
    assert stats["oldest_bluray"]["title"] == "Heat"
    assert stats["newest_bluray"]["title"] == "Alien"
    assert [item["title"] for item in stats["top_rated"]] == ["Heat", "Alien"]


@pytest.mark.asyncio
async def test_statistics_follow_configured_policies(client, monkeypatch):
    admin = await install_admin(client)
    await _seed(client, admin.headers)
    monkeypatch.setattr(settings, "stats_unknown_price_policy", UnknownPricePolicy.FLAT_FALLBACK)
    monkeypatch.setattr(settings, "stats_spotlight_basis", SpotlightBasis.RELEASE_YEAR)
    assert settings.statistics_options == StatisticsOptions(
        unknown_price_policy=UnknownPricePolicy.FLAT_FALLBACK,
        unknown_price_fallback=settings.stats_unknown_price_fallback,
        spotlight_basis=SpotlightBasis.RELEASE_YEAR,
    )

    stats = (await client.get(f"{API}/statistics", headers=admin.headers)).json()["statistics"]

    assert stats["total_spent"] == 64.0
    assert stats["oldest_bluray"]["title"] == "Alien"
    assert stats["newest_bluray"]["title"] == "The Wire"


@pytest.mark.asyncio
async def test_simplified_statistics_and_empty_collection(client):
    admin = await install_admin(client)

    stats = (await client.get(f"{API}/statistics", headers=admin.headers)).json()["statistics"]
    assert stats["total_blurays"] == 0
    assert stats["most_expensive"] is None
    assert stats["top_rated"] == []

    await _seed(client, admin.headers)
    res = await client.get(f"{API}/statistics/simplified", headers=admin.headers)
    assert res.json() == {"total_blurays": 4, "total_movies": 2, "total_series": 1, "total_seasons": 2}
