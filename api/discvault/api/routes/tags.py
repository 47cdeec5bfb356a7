from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from discvault.api.deps import get_current_user, get_db, require_editor
from discvault.models.user import User
from discvault.schema.tag import TagCreate, TagRead, TagUpdate
from discvault.services import tag_service

router = APIRouter()


@router.get("", response_model=list[TagRead])
async def list_tags(
    session: AsyncSession = Depends(get_db),
    _: User = Depends(get_current_user),
) -> list[TagRead]:
    tags = await tag_service.list_tags(session)
    return [TagRead.model_validate(tag) for tag in tags]


@router.get("/{tag_id}", response_model=TagRead)
async def get_tag_endpoint(
    tag_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
    _: User = Depends(get_current_user),
) -> TagRead:
    try:
        tag = await tag_service.get_tag(session, tag_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return TagRead.model_validate(tag)


@router.post("", response_model=TagRead, status_code=status.HTTP_201_CREATED)
async def create_tag_endpoint(
    payload: TagCreate,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_editor),
) -> TagRead:
    try:
        tag = await tag_service.create_tag(session, payload, created_by=current_user.id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return TagRead.model_validate(tag)


@router.put("/{tag_id}", response_model=TagRead)
async def update_tag_endpoint(
    tag_id: uuid.UUID,
    payload: TagUpdate,
    session: AsyncSession = Depends(get_db),
    _: User = Depends(require_editor),
) -> TagRead:
    try:
        await tag_service.get_tag(session, tag_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    try:
        tag = await tag_service.update_tag(session, tag_id, payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return TagRead.model_validate(tag)


@router.delete(
    "/{tag_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    response_model=None,
)
async def delete_tag_endpoint(
    tag_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
    _: User = Depends(require_editor),
) -> None:
    try:
        await tag_service.delete_tag(session, tag_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
