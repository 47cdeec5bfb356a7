"""TMDB and barcode lookup tests with outbound HTTP stubbed."""

from __future__ import annotations

import pytest

from discvault.core.config import settings
from discvault.ingestion import barcode, tmdb
from discvault.ingestion.http import ExternalAPIError
from discvault.ingestion.tmdb import TMDBClient, TMDBCredentialsMissing
from discvault.tests.utils import API, install_admin, register_and_login
from discvault.utils.redaction import redact_mapping, redact_secrets

DVDFR_RESPONSE = """<?xml version="1.0" encoding="UTF-8"?>
<dvds generator="dvdfr">
  <dvd>
    <id>12345</id>
    <media>BRD</media>
    <cover>https://covers.example/12345.jpg</cover>
    <titres>
      <fr>Le Parrain</fr>
      <vo>The Godfather</vo>
    </titres>
    <annee>1972</annee>
    <edition>Édition 50e anniversaire</edition>
    <editeur>Paramount</editeur>
    <stars>
      <star type="Réalisateur" id="1">Francis Ford Coppola</star>
      <star type="Acteur" id="2">Marlon Brando</star>
    </stars>
  </dvd>
  <dvd>
    <id>777</id>
    <titres><fr>Les Tontons flingueurs</fr><vo></vo></titres>
  </dvd>
</dvds>
"""


def test_tmdb_auth_prefers_bearer(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "tmdb_api_auth_header", "preferred-token")
    monkeypatch.setattr(settings, "tmdb_api_key", "api-key")

    headers, params = TMDBClient()._auth()

    assert headers["Authorization"] == "Bearer preferred-token"
    assert "api_key" not in params


def test_tmdb_auth_uses_api_key_when_header_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "tmdb_api_auth_header", None)
    monkeypatch.setattr(settings, "tmdb_api_key", "api-key")

    headers, params = TMDBClient()._auth()

    assert "Authorization" not in headers
    assert params["api_key"] == "api-key"


def test_tmdb_auth_errors_without_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "tmdb_api_auth_header", None)
    monkeypatch.setattr(settings, "tmdb_api_key", None)

    with pytest.raises(TMDBCredentialsMissing):
        TMDBClient()._auth()


@pytest.mark.asyncio
async def test_tmdb_details_merges_french_overview(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict] = []

    async def _fake_fetch_json(url, *, headers=None, params=None, method="GET"):
        calls.append({"url": url, **params})
        if params.get("language") == "fr-FR":
            return {"overview": "Un chef-d'œuvre."}
        return {"id": 238, "title": "The Godfather", "overview": "A masterpiece."}

    monkeypatch.setattr(tmdb, "fetch_json", _fake_fetch_json)
    client = TMDBClient(api_key="key", base_url="https://tmdb.test/3")

    payload = await client.details("movie", "238")

    assert payload["overview_fr"] == "Un chef-d'œuvre."
    assert calls[0]["url"] == "https://tmdb.test/3/movie/238"
    assert calls[0]["append_to_response"] == "credits"


@pytest.mark.asyncio
async def test_tmdb_details_tolerates_missing_french(monkeypatch: pytest.MonkeyPatch) -> None:
    async def _fake_fetch_json(url, *, headers=None, params=None, method="GET"):
        if params.get("language") == "fr-FR":
            raise ExternalAPIError("Server error 503", status_code=503)
        return {"id": 1, "name": "Show"}

    monkeypatch.setattr(tmdb, "fetch_json", _fake_fetch_json)

    payload = await TMDBClient(api_key="key").details("tv", "1")

    assert "overview_fr" not in payload


@pytest.mark.asyncio
async def test_tmdb_rejects_unknown_media_type() -> None:
    with pytest.raises(ValueError):
        await TMDBClient(api_key="key").search("book", "dune")


def test_parse_dvdfr_prefers_original_title_and_extracts_directors() -> None:
    items = barcode.parse_dvdfr(DVDFR_RESPONSE)

    assert len(items) == 2
    first = items[0]
    assert first.title == "The Godfather"
    assert first.directors == ["Francis Ford Coppola"]
    assert first.year == "1972"
    assert first.publisher == "Paramount"
    assert first.dvdfr_id == "12345"
    assert items[1].title == "Les Tontons flingueurs"
    assert items[1].directors == []


def test_parse_dvdfr_surfaces_api_errors() -> None:
    document = "<errors><error type='fatal'><code>42</code><message>Unknown gencode</message></error></errors>"

    with pytest.raises(ExternalAPIError, match="Unknown gencode"):
        barcode.parse_dvdfr(document)
    with pytest.raises(ExternalAPIError):
        barcode.parse_dvdfr("not xml")


def test_redaction_masks_credentials() -> None:
    assert redact_secrets("https://api.test/3?api_key=abc123&query=x") == "https://api.test/3?api_key=***&query=x"
    assert redact_secrets("Authorization: Bearer abc.def") == "Authorization: Bearer ***"
    assert redact_mapping({"api_key": "abc", "query": "x"}) == {"api_key": "***", "query": "x"}


@pytest.mark.asyncio
async def test_metadata_routes(client, monkeypatch: pytest.MonkeyPatch) -> None:
    admin = await install_admin(client)
    member = await register_and_login(client)

    async def _fake_search(self, media_type, query):
        return {"results": [{"id": 1, "title": query}]}

    async def _fake_upc(code):
        return {"code": "OK", "items": [{"ean": code}]}

    async def _fake_dvdfr(code):
        return barcode.parse_dvdfr(DVDFR_RESPONSE)

    monkeypatch.setattr(TMDBClient, "search", _fake_search)
    monkeypatch.setattr(barcode, "lookup_upc", _fake_upc)
    monkeypatch.setattr(barcode, "lookup_dvdfr", _fake_dvdfr)

    res = await client.get(f"{API}/tmdb/search", params={"type": "movie", "query": "Alien"}, headers=member.headers)
    assert res.status_code == 403

    res = await client.get(f"{API}/tmdb/search", params={"type": "movie", "query": "Alien"}, headers=admin.headers)
    assert res.status_code == 200
    assert res.json()["results"][0]["title"] == "Alien"

    res = await client.get(f"{API}/barcode/5051889004578", headers=admin.headers)
    assert res.json()["items"][0]["ean"] == "5051889004578"

    res = await client.get(f"{API}/barcode/5051889004578/dvdfr", headers=admin.headers)
    assert res.json()["items"][0]["title"] == "The Godfather"


@pytest.mark.asyncio
async def test_metadata_routes_map_upstream_failures(client, monkeypatch: pytest.MonkeyPatch) -> None:
    admin = await install_admin(client)
    monkeypatch.setattr(settings, "tmdb_api_auth_header", None)
    monkeypatch.setattr(settings, "tmdb_api_key", None)

    res = await client.get(f"{API}/tmdb/movie/238", headers=admin.headers)
    assert res.status_code == 503

    async def _failing_upc(code):
        raise ExternalAPIError("Server error 502", status_code=502)

    monkeypatch.setattr(barcode, "lookup_upc", _failing_upc)
    res = await client.get(f"{API}/barcode/123", headers=admin.headers)
    assert res.status_code == 502
