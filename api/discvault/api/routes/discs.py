"""Disc catalog endpoints: CRUD, search, and CSV exchange."""

import uuid

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from discvault.api.deps import get_current_user, get_db, pagination, require_editor
from discvault.catalog.records import MediaKind
from discvault.models.disc import Disc
from discvault.models.notification import NotificationType
from discvault.models.user import User
from discvault.schema.disc import (
    DiscCreate,
    DiscImportReport,
    DiscRead,
    DiscSummary,
    DiscTagsUpdate,
    DiscUpdate,
)
from discvault.services import csv_service, disc_service, notification_service

router = APIRouter()

EXPORT_FILENAME = "bluray-collection.csv"


@router.get("", response_model=list[DiscRead])
async def list_discs(
    media_kind: MediaKind | None = Query(default=None, alias="type"),
    genre: str | None = Query(default=None),
    page: tuple[int, int] = Depends(pagination),
    session: AsyncSession = Depends(get_db),
    _: User = Depends(get_current_user),
) -> list[Disc]:
    """List discs newest first."""
    skip, limit = page
    return await disc_service.list_discs(session, media_kind=media_kind, genre=genre, skip=skip, limit=limit)


@router.get("/simplified", response_model=list[DiscSummary])
async def list_simplified_discs(
    media_kind: MediaKind | None = Query(default=None, alias="type"),
    genre: str | None = Query(default=None),
    page: tuple[int, int] = Depends(pagination),
    session: AsyncSession = Depends(get_db),
    _: User = Depends(get_current_user),
) -> list[Disc]:
    skip, limit = page
    return await disc_service.list_discs(session, media_kind=media_kind, genre=genre, skip=skip, limit=limit)


@router.get("/search", response_model=list[DiscRead])
async def search_discs(
    q: str = Query(..., min_length=1),
    page: tuple[int, int] = Depends(pagination),
    session: AsyncSession = Depends(get_db),
    _: User = Depends(get_current_user),
) -> list[Disc]:
    """Search with ``field:value`` tokens (title, director, tag, genre, year, type, description) or free text."""
    skip, limit = page
    return await disc_service.search_discs(session, q, skip=skip, limit=limit)


@router.get("/export")
async def export_discs(
    session: AsyncSession = Depends(get_db),
    _: User = Depends(get_current_user),
) -> Response:
    content = await csv_service.export_csv(session)
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
    )


@router.post("/import", response_model=DiscImportReport)
async def import_discs(
    file: UploadFile = File(...),
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_editor),
) -> DiscImportReport:
    content = await file.read()
    try:
        return await csv_service.import_csv(session, content, added_by=current_user.id)
    except csv_service.CSVImportError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("", response_model=DiscRead, status_code=status.HTTP_201_CREATED)
async def create_disc(
    payload: DiscCreate,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_editor),
) -> Disc:
    try:
        disc = await disc_service.create_disc(session, payload, added_by=current_user.id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    await notification_service.create_notification(
        session,
        current_user.id,
        NotificationType.DISC_ADDED,
        f"Added '{disc.title}' to the collection",
        disc_id=disc.id,
    )
    return disc


@router.get("/{disc_id}", response_model=DiscRead)
async def get_disc(
    disc_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
    _: User = Depends(get_current_user),
) -> Disc:
    try:
        return await disc_service.get_disc(session, disc_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.put("/{disc_id}", response_model=DiscRead)
async def update_disc(
    disc_id: uuid.UUID,
    payload: DiscUpdate,
    session: AsyncSession = Depends(get_db),
    _: User = Depends(require_editor),
) -> Disc:
    try:
        await disc_service.get_disc(session, disc_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    try:
        return await disc_service.update_disc(session, disc_id, payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.put("/{disc_id}/tags", response_model=DiscRead)
async def update_disc_tags(
    disc_id: uuid.UUID,
    payload: DiscTagsUpdate,
    session: AsyncSession = Depends(get_db),
    _: User = Depends(require_editor),
) -> Disc:
    try:
        return await disc_service.update_tags(session, disc_id, payload.tags)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.delete(
    "/{disc_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    response_model=None,
)
async def delete_disc(
    disc_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_editor),
) -> None:
    try:
        title = await disc_service.delete_disc(session, disc_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    await notification_service.create_notification(
        session,
        current_user.id,
        NotificationType.DISC_REMOVED,
        f"Removed '{title}' from the collection",
        disc_id=disc_id,
    )
