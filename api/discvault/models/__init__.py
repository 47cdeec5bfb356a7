"""SQLAlchemy ORM models for the DiscVault API."""

from discvault.models.disc import Disc
from discvault.models.notification import Notification, NotificationType
from discvault.models.tagging import Tag
from discvault.models.user import EDITOR_ROLES, Language, Theme, User, UserRole

__all__ = [
    "Disc",
    "EDITOR_ROLES",
    "Language",
    "Notification",
    "NotificationType",
    "Tag",
    "Theme",
    "User",
    "UserRole",
]