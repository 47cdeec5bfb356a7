"""User request/response schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from discvault.models.user import Language, Theme, UserRole
from discvault.schema.base import ORMModel


class UserCreate(BaseModel):
    """Payload for registering a new user."""
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=8)


class AdminUserCreate(UserCreate):
    """Payload for admins creating accounts with an explicit role."""
    role: UserRole = UserRole.USER


class UserLogin(BaseModel):
    """Login payload; ``email`` also accepts a username."""
    email: str = Field(min_length=1)
    password: str


class UserSettingsRead(ORMModel):
    theme: Theme
    language: Language


class UserRead(ORMModel):
    """User profile fields exposed in API responses."""
    id: UUID
    username: str
    email: EmailStr
    role: UserRole
    theme: Theme
    language: Language
    created_at: datetime


class UserSettingsUpdate(BaseModel):
    theme: Theme | None = None
    language: Language | None = None


class UsernameUpdate(BaseModel):
    username: str = Field(min_length=3, max_length=50)


class PasswordUpdate(BaseModel):
    current_password: str
    new_password: str = Field(min_length=8)


class AdminUserUpdate(BaseModel):
    username: str | None = Field(default=None, min_length=3, max_length=50)
    email: EmailStr | None = None


class RoleUpdate(BaseModel):
    role: UserRole
