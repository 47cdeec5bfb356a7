"""TMDB and barcode lookups for editors cataloging new discs."""

from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, Query, status

from discvault.api.deps import require_editor
from discvault.ingestion import barcode
from discvault.ingestion.http import ExternalAPIError
from discvault.ingestion.tmdb import TMDBClient, TMDBCredentialsMissing
from discvault.models.user import User

router = APIRouter()


def get_tmdb_client() -> TMDBClient:
    return TMDBClient()


def _raise_for_upstream(exc: ExternalAPIError) -> NoReturn:
    if isinstance(exc, TMDBCredentialsMissing):
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found upstream") from exc
    raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc


@router.get("/tmdb/search")
async def search_tmdb(
    media_type: str = Query(..., alias="type"),
    query: str = Query(...),
    client: TMDBClient = Depends(get_tmdb_client),
    _: User = Depends(require_editor),
) -> dict:
    try:
        return await client.search(media_type, query)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ExternalAPIError as exc:
        _raise_for_upstream(exc)


@router.get("/tmdb/find/{external_id}")
async def find_tmdb(
    external_id: str,
    external_source: str = Query(default="imdb_id"),
    client: TMDBClient = Depends(get_tmdb_client),
    _: User = Depends(require_editor),
) -> dict:
    try:
        return await client.find(external_id, external_source=external_source)
    except ExternalAPIError as exc:
        _raise_for_upstream(exc)


@router.get("/tmdb/{media_type}/{tmdb_id}")
async def tmdb_details(
    media_type: str,
    tmdb_id: str,
    client: TMDBClient = Depends(get_tmdb_client),
    _: User = Depends(require_editor),
) -> dict:
    """English details with ``overview_fr`` added from the French listing."""
    try:
        return await client.details(media_type, tmdb_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ExternalAPIError as exc:
        _raise_for_upstream(exc)


@router.get("/barcode/{code}")
async def lookup_barcode(code: str, _: User = Depends(require_editor)) -> dict:
    try:
        return await barcode.lookup_upc(code)
    except ExternalAPIError as exc:
        _raise_for_upstream(exc)


@router.get("/barcode/{code}/dvdfr")
async def lookup_barcode_dvdfr(code: str, _: User = Depends(require_editor)) -> dict:
    try:
        items = await barcode.lookup_dvdfr(code)
    except ExternalAPIError as exc:
        _raise_for_upstream(exc)
    return {"items": [item.to_dict() for item in items]}
