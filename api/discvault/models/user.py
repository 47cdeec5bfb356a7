"""User model with roles and display preferences."""

from __future__ import annotations

import enum
import typing
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from discvault.db.base_class import Base

if typing.TYPE_CHECKING:  # pragma: no cover
    from discvault.models.notification import Notification


class UserRole(str, enum.Enum):
    """Access levels, from full control down to read-only."""
    ADMIN = "admin"
    MODERATOR = "moderator"
    USER = "user"
    GUEST = "guest"


class Theme(str, enum.Enum):
    LIGHT = "light"
    DARK = "dark"


class Language(str, enum.Enum):
    EN = "en"
    FR = "fr"


EDITOR_ROLES = (UserRole.ADMIN, UserRole.MODERATOR)


class User(Base):
    """Primary user account record."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    # Persist the enum values (lowercase) instead of names (uppercase)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role", values_callable=lambda enum_cls: [e.value for e in enum_cls]),
        nullable=False,
        default=UserRole.USER,
    )
    theme: Mapped[Theme] = mapped_column(
        Enum(Theme, name="user_theme", values_callable=lambda enum_cls: [e.value for e in enum_cls]),
        nullable=False,
        default=Theme.DARK,
    )
    language: Mapped[Language] = mapped_column(
        Enum(Language, name="user_language", values_callable=lambda enum_cls: [e.value for e in enum_cls]),
        nullable=False,
        default=Language.EN,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow
    )

    notifications: Mapped[list["Notification"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
