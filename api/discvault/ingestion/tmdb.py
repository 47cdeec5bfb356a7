"""TMDB metadata client used when cataloging discs."""

from __future__ import annotations

from typing import Any

from discvault.core.config import settings
from discvault.ingestion.http import ExternalAPIError, fetch_json

MEDIA_TYPES = ("movie", "tv")
ENGLISH = "en-US"
FRENCH = "fr-FR"


class TMDBCredentialsMissing(ExternalAPIError):
    pass


class TMDBClient:
    def __init__(self, api_key: str | None = None, auth_token: str | None = None, base_url: str | None = None) -> None:
        self.api_key = api_key or settings.tmdb_api_key
        self.auth_token = auth_token or settings.tmdb_api_auth_header
        self.base_url = (base_url or settings.tmdb_base_url).rstrip("/")

    def _auth(self) -> tuple[dict[str, str], dict[str, str]]:
        headers: dict[str, str] = {"accept": "application/json"}
        params: dict[str, str] = {}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        elif self.api_key:
            params["api_key"] = self.api_key
        else:
            raise TMDBCredentialsMissing("TMDB API credentials missing; set TMDB_API_AUTH_HEADER or TMDB_API_KEY")
        return headers, params

    @staticmethod
    def _check_media_type(media_type: str) -> str:
        if media_type not in MEDIA_TYPES:
            raise ValueError("type must be 'movie' or 'tv'")
        return media_type

    async def _get(self, path: str, **extra: Any) -> dict:
        headers, params = self._auth()
        return await fetch_json(f"{self.base_url}/{path}", headers=headers, params={**params, **extra})

    async def search(self, media_type: str, query: str) -> dict:
        """Forward a title search to TMDB."""
        if not query.strip():
            raise ValueError("query is required")
        return await self._get(f"search/{self._check_media_type(media_type)}", query=query.strip())

    async def details(self, media_type: str, tmdb_id: str) -> dict:
        """English details with credits, plus ``overview_fr`` when TMDB has one."""
        kind = self._check_media_type(media_type)
        payload = await self._get(f"{kind}/{tmdb_id}", language=ENGLISH, append_to_response="credits")
        try:
            french = await self._get(f"{kind}/{tmdb_id}", language=FRENCH)
        except ExternalAPIError:
            french = {}
        overview_fr = french.get("overview") if isinstance(french, dict) else None
        if overview_fr:
            payload["overview_fr"] = overview_fr
        return payload

    async def find(self, external_id: str, *, external_source: str = "imdb_id") -> dict:
        """Resolve an external id such as an IMDb id to TMDB entries."""
        return await self._get(f"find/{external_id}", external_source=external_source)
