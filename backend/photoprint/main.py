"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import timedelta

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from photoprint.api.v1 import admin, health, orders, pricing, uploads
from photoprint.config import settings
from photoprint.db import dispose_engine
from photoprint.logging import setup_logging
from photoprint.middleware import RateLimitMiddleware
from photoprint.services.rate_limit import build_rate_limit_store
from photoprint.services.storage import UploadStorage

# Configure logging before anything else
setup_logging()

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown events."""
    logger.info("Starting Photoprint API", debug=settings.debug)

    await UploadStorage().ensure_root()
    logger.info("Upload storage initialized", upload_dir=str(settings.upload_dir))

    yield

    logger.info("Shutting down Photoprint API")
    await dispose_engine()
    logger.info("Database connections disposed")


app = FastAPI(
    title="Photoprint API",
    description="Photo print storefront and admin API",
    version="0.1.0",
    lifespan=lifespan,
)

# Kept on app.state so tests and admin tooling can reset counters
app.state.rate_limit_store = build_rate_limit_store(settings)

app.add_middleware(
    RateLimitMiddleware,
    store=app.state.rate_limit_store,
    window=timedelta(seconds=settings.rate_limit_window_seconds),
    default_limit=settings.rate_limit_default,
)

# CORS middleware (added last so it wraps rate-limited responses too)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.backend_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(health.router, prefix="/api/v1", tags=["health"])
app.include_router(uploads.router, prefix="/api/v1", tags=["uploads"])
app.include_router(orders.router, prefix="/api/v1", tags=["orders"])
app.include_router(pricing.router, prefix="/api/v1", tags=["pricing"])
app.include_router(admin.router, prefix="/api/v1", tags=["admin"])
