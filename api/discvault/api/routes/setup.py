"""First-run installation endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from discvault.api.deps import get_db
from discvault.api.routes.auth import token_response
from discvault.models.user import UserRole
from discvault.schema.auth import SetupStatus, TokenResponse
from discvault.schema.user import UserCreate
from discvault.services import user_service

router = APIRouter()


@router.get("/check", response_model=SetupStatus)
async def check_setup(session: AsyncSession = Depends(get_db)) -> SetupStatus:
    return SetupStatus(needs_setup=not await user_service.admin_exists(session))


@router.post("/install", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def install(payload: UserCreate, session: AsyncSession = Depends(get_db)) -> TokenResponse:
    """Create the first administrator; refused once one exists."""
    if await user_service.admin_exists(session):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Setup already completed")
    user = await user_service.create_user(
        session,
        username=payload.username,
        email=payload.email,
        password=payload.password,
        role=UserRole.ADMIN,
    )
    return token_response(user)
