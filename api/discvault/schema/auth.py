"""Authentication-related request/response schemas."""

from pydantic import BaseModel

from discvault.schema.user import UserRead


class TokenResponse(BaseModel):
    """Access token bundle returned after auth."""
    access_token: str
    token_type: str = "bearer"
    user: UserRead


class SetupStatus(BaseModel):
    needs_setup: bool
