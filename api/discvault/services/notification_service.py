"""Per-user notifications about catalog changes."""

from __future__ import annotations

import uuid

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from discvault.models.notification import Notification, NotificationType


async def create_notification(
    session: AsyncSession,
    user_id: uuid.UUID,
    notification_type: NotificationType,
    message: str,
    *,
    disc_id: uuid.UUID | None = None,
) -> Notification:
    notification = Notification(
        user_id=user_id,
        notification_type=notification_type,
        message=message,
        disc_id=disc_id,
    )
    session.add(notification)
    await session.commit()
    await session.refresh(notification)
    return notification


async def list_notifications(session: AsyncSession, user_id: uuid.UUID, *, limit: int = 50) -> list[Notification]:
    """Latest notifications first."""
    stmt = (
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc())
        .limit(limit)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def mark_read(session: AsyncSession, user_id: uuid.UUID, notification_id: uuid.UUID) -> Notification:
    notification = await session.get(Notification, notification_id)
    if not notification or notification.user_id != user_id:
        raise ValueError("Notification not found")
    notification.read = True
    await session.commit()
    await session.refresh(notification)
    return notification


async def mark_all_read(session: AsyncSession, user_id: uuid.UUID) -> int:
    """Mark every unread notification of a user as read; returns the count."""
    result = await session.execute(
        update(Notification)
        .where(Notification.user_id == user_id, Notification.read.is_(False))
        .values(read=True)
    )
    await session.commit()
    return result.rowcount or 0
