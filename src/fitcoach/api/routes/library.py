"""Library API routes: favorite videos, personal records and app settings."""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends

from ..deps import get_engine
from ...exceptions import NotFoundError, StorageWriteError
from ...models.library import AppSettings, FavoriteVideo, PersonalRecord
from ...models.progress import CamelModel
from ...services.library_service import RemoveOutcome
from ...services.progression import ProgressionEngine
from ...storage.base import StorageKeys


router = APIRouter()


class FavoriteAdded(CamelModel):
    added: bool


class RecordUpdated(CamelModel):
    updated: bool
    record: PersonalRecord


@router.get("/favorites", response_model=List[FavoriteVideo])
async def list_favorites(engine: ProgressionEngine = Depends(get_engine)):
    """Get saved videos."""
    return await engine.favorites.list()


@router.post("/favorites", response_model=FavoriteAdded, status_code=201)
async def add_favorite(
    video: FavoriteVideo,
    engine: ProgressionEngine = Depends(get_engine),
):
    """Save a video. ``added`` is false when it was already a favorite."""
    return FavoriteAdded(added=await engine.favorites.add(video))


@router.delete("/favorites/{video_id}", status_code=204)
async def remove_favorite(
    video_id: str,
    engine: ProgressionEngine = Depends(get_engine),
):
    """Remove a saved video."""
    outcome = await engine.favorites.remove(video_id)
    if outcome == RemoveOutcome.NOT_FOUND:
        raise NotFoundError("Favorite", video_id)
    if outcome == RemoveOutcome.NOT_SAVED:
        raise StorageWriteError(StorageKeys.FAVORITE_VIDEOS, "favorite not removed")


@router.get("/records", response_model=Dict[str, PersonalRecord])
async def get_records(engine: ProgressionEngine = Depends(get_engine)):
    """Get personal records keyed by exercise id."""
    return await engine.records.get_all()


@router.put("/records", response_model=RecordUpdated)
async def update_record(
    record: PersonalRecord,
    engine: ProgressionEngine = Depends(get_engine),
):
    """Store a result if it is the first for its exercise or beats the stored one."""
    updated = await engine.records.update(record)
    records = await engine.records.get_all()
    return RecordUpdated(updated=updated, record=records.get(record.exercise_id, record))


@router.get("/settings", response_model=AppSettings)
async def get_app_settings(engine: ProgressionEngine = Depends(get_engine)):
    return await engine.settings.get()


@router.put("/settings", response_model=AppSettings)
async def update_app_settings(
    changes: Dict[str, Any] = Body(...),
    engine: ProgressionEngine = Depends(get_engine),
):
    """Merge the given keys into the stored settings."""
    return await engine.settings.update(changes)
