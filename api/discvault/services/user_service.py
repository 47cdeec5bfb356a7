from __future__ import annotations

import logging
import uuid

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from discvault.core.config import settings
from discvault.core.security import get_password_hash, verify_password
from discvault.models.user import Language, Theme, User, UserRole

logger = logging.getLogger("discvault.services.users")


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def get_user_by_username(session: AsyncSession, username: str) -> User | None:
    result = await session.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def get_user_by_id(session: AsyncSession, user_id: str | uuid.UUID) -> User | None:
    try:
        user_uuid = uuid.UUID(str(user_id))
    except ValueError:
        return None
    result = await session.execute(select(User).where(User.id == user_uuid))
    return result.scalar_one_or_none()


async def create_user(
    session: AsyncSession,
    username: str,
    email: str,
    password: str,
    role: UserRole = UserRole.USER,
) -> User:
    if await get_user_by_email(session, email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
    if await get_user_by_username(session, username):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username already taken")
    user = User(
        username=username,
        email=email.lower(),
        hashed_password=get_password_hash(password),
        role=role,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    logger.info("Created user %s with role %s", user.id, role.value)
    return user


async def authenticate_user(session: AsyncSession, identifier: str, password: str) -> User:
    """Authenticate by email, falling back to username."""
    user = await get_user_by_email(session, identifier)
    if not user:
        user = await get_user_by_username(session, identifier)
    if not user or not verify_password(password, user.hashed_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return user


async def list_users(session: AsyncSession, *, skip: int = 0, limit: int = 20) -> list[User]:
    stmt = select(User).order_by(User.created_at.asc(), User.username.asc()).offset(skip).limit(limit)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def admin_exists(session: AsyncSession) -> bool:
    result = await session.execute(select(func.count(User.id)).where(User.role == UserRole.ADMIN))
    return bool(result.scalar_one())


async def update_settings(
    session: AsyncSession, user: User, *, theme: Theme | None = None, language: Language | None = None
) -> User:
    if theme is not None:
        user.theme = theme
    if language is not None:
        user.language = language
    await session.commit()
    await session.refresh(user)
    return user


async def update_username(session: AsyncSession, user: User, username: str) -> User:
    existing = await get_user_by_username(session, username)
    if existing and existing.id != user.id:
        raise ValueError("Username already taken")
    user.username = username
    await session.commit()
    await session.refresh(user)
    return user


async def update_password(session: AsyncSession, user: User, current_password: str, new_password: str) -> None:
    if not verify_password(current_password, user.hashed_password):
        raise ValueError("Current password is incorrect")
    user.hashed_password = get_password_hash(new_password)
    await session.commit()


async def update_profile(
    session: AsyncSession, user: User, *, username: str | None = None, email: str | None = None
) -> User:
    """Admin edit of identity fields, enforcing uniqueness."""
    if username is not None and username != user.username:
        clash = await session.execute(
            select(User.id).where(User.username == username, User.id != user.id)
        )
        if clash.first():
            raise ValueError("Username already taken")
        user.username = username
    if email is not None and email.lower() != user.email:
        clash = await session.execute(
            select(User.id).where(User.email == email.lower(), User.id != user.id)
        )
        if clash.first():
            raise ValueError("Email already registered")
        user.email = email.lower()
    await session.commit()
    await session.refresh(user)
    return user


async def update_role(session: AsyncSession, user: User, role: UserRole) -> User:
    user.role = role
    await session.commit()
    await session.refresh(user)
    logger.info("Changed role of user %s to %s", user.id, role.value)
    return user


async def delete_user(session: AsyncSession, user: User) -> None:
    await session.delete(user)
    await session.commit()
    logger.info("Deleted user %s", user.id)


async def ensure_guest_user(session: AsyncSession) -> bool:
    """Create the shared read-only guest account. Returns True if created."""
    if await get_user_by_email(session, settings.guest_email):
        return False
    guest = User(
        username="guest",
        email=settings.guest_email,
        hashed_password=get_password_hash(settings.guest_password),
        role=UserRole.GUEST,
        theme=Theme.DARK,
        language=Language.EN,
    )
    session.add(guest)
    await session.commit()
    logger.info("Created guest account %s", settings.guest_email)
    return True
