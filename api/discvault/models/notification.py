"""Per-user notifications about catalog changes."""

from __future__ import annotations

import enum
import typing
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from discvault.db.base_class import Base

if typing.TYPE_CHECKING:  # pragma: no cover
    from discvault.models.user import User


class NotificationType(str, enum.Enum):
    DISC_ADDED = "bluray_added"
    DISC_REMOVED = "bluray_removed"


class Notification(Base):
    __tablename__ = "notifications"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    notification_type: Mapped[NotificationType] = mapped_column(
        Enum(
            NotificationType,
            name="notification_type",
            values_callable=lambda enum_cls: [e.value for e in enum_cls],
        ),
        nullable=False,
    )
    message: Mapped[str] = mapped_column(String(500), nullable=False)
    # Kept after the disc is deleted so removal notices still point somewhere.
    disc_id: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True))
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, index=True)

    user: Mapped["User"] = relationship(back_populates="notifications")
