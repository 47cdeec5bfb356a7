"""Notification response schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from discvault.models.notification import NotificationType
from discvault.schema.base import ORMModel


class NotificationRead(ORMModel):
    id: UUID
    notification_type: NotificationType
    message: str
    disc_id: UUID | None = None
    read: bool
    created_at: datetime
