"""FastAPI application for fitcoach."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.deps import get_video_catalog
from .api.exception_handlers import register_exception_handlers
from .api.routes import coach, library, progress, videos
from .config import get_settings
from .utils.log_sanitizer import install_log_sanitizer

# Must be installed before any logging occurs
install_log_sanitizer()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    logger.info(f"Starting fitcoach v{__version__}")
    logger.info(f"Storage: {settings.storage_backend} (namespace '{settings.storage_namespace}')")
    if settings.storage_backend == "sqlite":
        logger.info(f"Database: {settings.db_path}")

    if not settings.openai_api_key:
        logger.warning("OpenAI API key is not configured. The coach will use canned replies.")
    if not settings.youtube_api_key:
        logger.warning("YouTube API key is not configured. The video catalog will use fallback videos.")

    yield

    logger.info("Shutting down fitcoach")
    await get_video_catalog().close()


app = FastAPI(
    title="fitcoach API",
    description="Workout progression, daily challenges, achievements and AI coaching",
    version=__version__,
    lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(progress.router, prefix="/api/v1/progress", tags=["progress"])
app.include_router(library.router, prefix="/api/v1/library", tags=["library"])
app.include_router(videos.router, prefix="/api/v1/videos", tags=["videos"])
app.include_router(coach.router, prefix="/api/v1/coach", tags=["coach"])


@app.get("/health")
async def health_check():
    """Liveness check."""
    return {"status": "healthy", "version": __version__}
