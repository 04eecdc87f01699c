"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..comparison import ComparisonCache, ComparisonService
from ..config import Settings, settings as default_settings
from .routes import router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    # Startup
    logger.info("SheetDiff started")
    yield
    # Shutdown
    app.state.comparison_service.cache.invalidate_all()
    logger.info("SheetDiff stopped, comparison cache cleared")


def create_app(
    settings: Optional[Settings] = None,
    cache: Optional[ComparisonCache] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or default_settings
    cache = cache or ComparisonCache(ttl_minutes=settings.comparison_ttl_minutes)

    app = FastAPI(
        title="SheetDiff",
        description="Side-by-side spreadsheet comparison",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.comparison_service = ComparisonService(
        cache=cache,
        page_size=settings.page_size,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # API routes
    app.include_router(router, prefix="/api")

    return app
