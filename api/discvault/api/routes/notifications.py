import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from discvault.api.deps import get_current_user, get_db
from discvault.core.config import settings
from discvault.models.user import User
from discvault.schema.notification import NotificationRead
from discvault.services import notification_service

router = APIRouter()


@router.get("", response_model=list[NotificationRead])
async def list_notifications(
    limit: int = Query(default=settings.notification_list_limit, ge=1, le=settings.max_page_size),
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Latest notifications for the current user."""
    return await notification_service.list_notifications(session, current_user.id, limit=limit)


@router.put("/read-all")
async def mark_all_notifications_read(
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> dict[str, int]:
    updated = await notification_service.mark_all_read(session, current_user.id)
    return {"updated": updated}


@router.put("/{notification_id}/read", response_model=NotificationRead)
async def mark_notification_read(
    notification_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return await notification_service.mark_read(session, current_user.id, notification_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
