"""FastAPI application entrypoint."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from discvault.api.router import api_router
from discvault.core.config import settings
from discvault.core.logging import configure_logging
from discvault.db.session import SessionLocal
from discvault.services import user_service

logger = logging.getLogger("discvault.main")

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router, prefix=settings.api_prefix)


@app.on_event("startup")
async def _startup() -> None:
    """Configure logging and make sure the guest account exists."""
    configure_logging()
    if settings.guest_account_enabled:
        async with SessionLocal() as session:
            await user_service.ensure_guest_user(session)
    logger.info("Started %s (%s)", settings.app_name, settings.environment)


@app.get("/health", tags=["internal"])
@app.get(f"{settings.api_prefix}/health", tags=["internal"])
async def health() -> dict[str, str]:
    return {"status": "ok"}
