from typing import AsyncIterator, Awaitable, Callable

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from discvault.core.config import settings
from discvault.core.security import decode_token
from discvault.db.session import get_session
from discvault.models.user import EDITOR_ROLES, User, UserRole
from discvault.services import user_service

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.api_prefix}/auth/login", auto_error=False)


async def get_db() -> AsyncIterator[AsyncSession]:
    async for session in get_session():
        yield session


async def get_current_user(
    session: AsyncSession = Depends(get_db),
    token: str | None = Depends(oauth2_scheme),
) -> User:
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return await _resolve_user_from_token(session, token)


async def _resolve_user_from_token(session: AsyncSession, token: str) -> User:
    payload = decode_token(token)
    if not payload or payload.get("type") != "access":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    user_id = payload.get("sub")
    user = await user_service.get_user_by_id(session, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return user


async def get_optional_current_user(
    session: AsyncSession = Depends(get_db),
    token: str | None = Depends(oauth2_scheme),
) -> User | None:
    if not token:
        return None
    return await _resolve_user_from_token(session, token)


def require_roles(*roles: UserRole) -> Callable[..., Awaitable[User]]:
    """Dependency factory rejecting users outside ``roles`` with 403."""
    allowed = frozenset(roles)

    async def _checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return current_user

    return _checker


require_editor = require_roles(*EDITOR_ROLES)
require_admin = require_roles(UserRole.ADMIN)


def pagination(
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=settings.default_page_size, ge=1, le=settings.max_page_size),
) -> tuple[int, int]:
    return skip, limit
