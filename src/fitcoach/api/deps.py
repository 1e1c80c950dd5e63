"""Dependency injection for API routes."""

from functools import lru_cache

from ..integrations.video_catalog import VideoCatalogClient
from ..llm.coach import CoachClient
from ..services.progression import ProgressionEngine
from ..storage import create_store
from ..storage.base import KeyValueStore


@lru_cache
def get_store() -> KeyValueStore:
    """Get the configured key-value store."""
    return create_store()


@lru_cache
def get_engine() -> ProgressionEngine:
    """Get the progression engine over the configured store."""
    return ProgressionEngine(get_store())


@lru_cache
def get_video_catalog() -> VideoCatalogClient:
    """Get the video catalog client."""
    return VideoCatalogClient()


@lru_cache
def get_coach() -> CoachClient:
    """Get the AI coach (fallback-only when no OpenAI key is set)."""
    return CoachClient.from_settings()
