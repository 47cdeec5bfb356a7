"""Administrator user management."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from discvault.api.deps import get_db, pagination, require_admin
from discvault.models.user import User
from discvault.schema.user import AdminUserCreate, AdminUserUpdate, RoleUpdate, UserRead
from discvault.services import user_service

router = APIRouter()


async def _get_user_or_404(session: AsyncSession, user_id: uuid.UUID) -> User:
    user = await user_service.get_user_by_id(session, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("/users", response_model=list[UserRead])
async def list_users(
    page: tuple[int, int] = Depends(pagination),
    session: AsyncSession = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[User]:
    skip, limit = page
    return await user_service.list_users(session, skip=skip, limit=limit)


@router.get("/users/{user_id}", response_model=UserRead)
async def get_user(
    user_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
    _: User = Depends(require_admin),
) -> User:
    return await _get_user_or_404(session, user_id)


@router.post("/users", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: AdminUserCreate,
    session: AsyncSession = Depends(get_db),
    _: User = Depends(require_admin),
) -> User:
    return await user_service.create_user(
        session,
        username=payload.username,
        email=payload.email,
        password=payload.password,
        role=payload.role,
    )


@router.put("/users/{user_id}", response_model=UserRead)
async def update_user(
    user_id: uuid.UUID,
    payload: AdminUserUpdate,
    session: AsyncSession = Depends(get_db),
    _: User = Depends(require_admin),
) -> User:
    user = await _get_user_or_404(session, user_id)
    try:
        return await user_service.update_profile(session, user, username=payload.username, email=payload.email)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.put("/users/{user_id}/role", response_model=UserRead)
async def update_user_role(
    user_id: uuid.UUID,
    payload: RoleUpdate,
    session: AsyncSession = Depends(get_db),
    _: User = Depends(require_admin),
) -> User:
    user = await _get_user_or_404(session, user_id)
    return await user_service.update_role(session, user, payload.role)


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    response_model=None,
)
async def delete_user(
    user_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> None:
    if user_id == current_user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot delete your own account")
    user = await _get_user_or_404(session, user_id)
    await user_service.delete_user(session, user)
