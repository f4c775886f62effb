"""FastAPI application entry point.

Start with:
    uvicorn authguard.main:app --reload
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI

from authguard.config import get_settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
#  Lifespan: startup / shutdown
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging and load the shared secret once at startup."""
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if not settings.api_secret_key.get_secret_value():
        logger.error("API_SECRET_KEY is empty; every callback will be rejected")
    logger.info("authguard starting up")

    yield

    logger.info("authguard shutting down")


# ---------------------------------------------------------------------------
#  FastAPI application
# ---------------------------------------------------------------------------

app = FastAPI(
    title="authguard",
    description="HMAC verification for OAuth authorization callbacks",
    version="0.1.0",
    lifespan=lifespan,
)


# ---------------------------------------------------------------------------
#  Router Registration
# ---------------------------------------------------------------------------

from authguard.api.auth import router as auth_router  # noqa: E402

app.include_router(auth_router, prefix="/api/auth")
