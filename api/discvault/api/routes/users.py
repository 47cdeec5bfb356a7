"""Self-service endpoints for the signed-in user."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from discvault.api.deps import get_current_user, get_db
from discvault.models.user import User
from discvault.schema.user import PasswordUpdate, UsernameUpdate, UserRead, UserSettingsUpdate
from discvault.services import user_service

router = APIRouter()


@router.get("/me", response_model=UserRead)
async def read_current_user(current_user: User = Depends(get_current_user)) -> User:
    return current_user


@router.put("/settings", response_model=UserRead)
async def update_settings(
    payload: UserSettingsUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> User:
    """Update theme and language preferences."""
    return await user_service.update_settings(
        session, current_user, theme=payload.theme, language=payload.language
    )


@router.put("/username", response_model=UserRead)
async def update_username(
    payload: UsernameUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> User:
    try:
        return await user_service.update_username(session, current_user, payload.username)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.put("/password", status_code=status.HTTP_204_NO_CONTENT, response_class=Response, response_model=None)
async def update_password(
    payload: PasswordUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> None:
    try:
        await user_service.update_password(session, current_user, payload.current_password, payload.new_password)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
