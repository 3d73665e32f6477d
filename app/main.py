"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api.routes import bible, search
from app.core.config import settings
from app.core.logging import setup_logging, get_logger
from app.db.mongodb import mongodb
from app.services.bible import bible_search
from app.services.bible.exceptions import VersionLoadError

# Set up logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup/shutdown."""
    # Startup
    logger.info("application_starting", app_name=settings.app_name)

    # Sermons and notes come from MongoDB; verse search works without it
    try:
        await mongodb.connect()
        await mongodb.ensure_indexes()
    except Exception as e:
        logger.warning("mongodb_connection_failed", error=str(e))

    for version in settings.preload_versions:
        try:
            await bible_search.load_version(version)
        except VersionLoadError as e:
            logger.warning("bible_version_preload_failed", version=version, error=str(e))

    logger.info("application_started")

    yield

    # Shutdown
    logger.info("application_stopping")
    if mongodb.is_connected:
        await mongodb.disconnect()
    logger.info("application_stopped")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Scripture, sermon and note search for the church app",
    version="0.1.0",
    lifespan=lifespan,
)

# Include routers
app.include_router(bible.router)
app.include_router(search.router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "message": "Scripture Search API",
        "docs": "/docs",
    }
