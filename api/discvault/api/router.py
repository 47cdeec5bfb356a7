"""API router composition for all route groups."""

from fastapi import APIRouter

from .routes import (
    admin,
    auth,
    discs,
    metadata,
    notifications,
    setup,
    statistics,
    tags,
    users,
)

api_router = APIRouter()
api_router.include_router(setup.router, prefix="/setup", tags=["setup"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/user", tags=["users"])
api_router.include_router(discs.router, prefix="/discs", tags=["discs"])
api_router.include_router(tags.router, prefix="/tags", tags=["tags"])
api_router.include_router(statistics.router, prefix="/statistics", tags=["statistics"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
api_router.include_router(metadata.router, tags=["metadata"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
