"""API test client with the engine, catalog and coach swapped for test doubles."""

import random

import pytest
from fastapi.testclient import TestClient

from fitcoach.api.deps import get_coach, get_engine, get_video_catalog
from fitcoach.config import Settings
from fitcoach.integrations.video_catalog import VideoCatalogClient
from fitcoach.llm.coach import CoachClient
from fitcoach.main import app


@pytest.fixture
def catalog():
    """Catalog with no API key, so only fallback videos are served."""
    return VideoCatalogClient(
        settings=Settings(youtube_api_key="", storage_backend="memory"),
        rng=random.Random(0),
    )


@pytest.fixture
def coach():
    return CoachClient(llm=None, rng=random.Random(0))


@pytest.fixture
def client(engine, catalog, coach):
    """Create a test client for the API."""
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_video_catalog] = lambda: catalog
    app.dependency_overrides[get_coach] = lambda: coach
    yield TestClient(app)
    app.dependency_overrides.clear()
