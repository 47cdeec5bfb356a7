from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from discvault.api.deps import get_current_user, get_db
from discvault.core.security import create_access_token
from discvault.models.user import User
from discvault.schema.auth import TokenResponse
from discvault.schema.user import UserCreate, UserLogin, UserRead
from discvault.services import user_service

router = APIRouter()


def token_response(user: User) -> TokenResponse:
    access = create_access_token(str(user.id), role=user.role.value)
    return TokenResponse(access_token=access, user=UserRead.model_validate(user))


@router.post("/register", response_model=TokenResponse)
async def register(payload: UserCreate, session: AsyncSession = Depends(get_db)) -> TokenResponse:
    user = await user_service.create_user(
        session, username=payload.username, email=payload.email, password=payload.password
    )
    return token_response(user)


@router.post("/login", response_model=TokenResponse)
async def login(payload: UserLogin, session: AsyncSession = Depends(get_db)) -> TokenResponse:
    user = await user_service.authenticate_user(session, payload.email.strip(), payload.password)
    return token_response(user)


@router.get("/me", response_model=UserRead)
async def read_current_user(current_user: User = Depends(get_current_user)) -> User:
    """Return the current authenticated user."""
    return current_user
