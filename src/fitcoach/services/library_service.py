"""Favorite videos and personal records."""

from enum import Enum
from typing import Any, Dict, List

from .base import BaseService
from ..models.library import FavoriteVideo, PersonalRecord
from ..storage.base import StorageKeys


class RemoveOutcome(str, Enum):
    """Result of removing a favorite."""

    REMOVED = "removed"
    NOT_FOUND = "not_found"
    NOT_SAVED = "not_saved"


def _parse_favorites(raw: Any) -> List[FavoriteVideo]:
    if not isinstance(raw, list):
        raise ValueError("favorites is not a list")
    return [FavoriteVideo.model_validate(item) for item in raw]


def _parse_records(raw: Any) -> Dict[str, PersonalRecord]:
    if not isinstance(raw, dict):
        raise ValueError("personal records is not a mapping")
    return {key: PersonalRecord.model_validate(value) for key, value in raw.items()}


def is_improvement(candidate: PersonalRecord, existing: PersonalRecord) -> bool:
    """Whether candidate beats existing on time, reps or weight."""
    if candidate.best_time < existing.best_time:
        return True
    if candidate.max_reps > existing.max_reps:
        return True
    if candidate.max_weight and (
        not existing.max_weight or candidate.max_weight > existing.max_weight
    ):
        return True
    return False


class FavoritesStore(BaseService):
    """Saved videos keyed by catalog id."""

    async def list(self) -> List[FavoriteVideo]:
        return await self._read_or_default(
            StorageKeys.FAVORITE_VIDEOS, _parse_favorites, list
        )

    async def add(self, video: FavoriteVideo) -> bool:
        """Save a video unless it is already a favorite. Returns True if added."""
        favorites = await self.list()
        if any(favorite.id == video.id for favorite in favorites):
            return False

        favorites.append(video.model_copy(update={"added_at": self.now()}))
        return await self._write(
            StorageKeys.FAVORITE_VIDEOS, [f.to_storage() for f in favorites]
        )

    async def remove(self, video_id: str) -> RemoveOutcome:
        """Drop a favorite, telling an absent id apart from a failed write."""
        favorites = await self.list()
        remaining = [favorite for favorite in favorites if favorite.id != video_id]
        if len(remaining) == len(favorites):
            return RemoveOutcome.NOT_FOUND
        saved = await self._write(
            StorageKeys.FAVORITE_VIDEOS, [f.to_storage() for f in remaining]
        )
        return RemoveOutcome.REMOVED if saved else RemoveOutcome.NOT_SAVED

    async def is_favorited(self, video_id: str) -> bool:
        favorites = await self.list()
        return any(favorite.id == video_id for favorite in favorites)


class PersonalRecordsStore(BaseService):
    """Best results keyed by exercise id."""

    async def get_all(self) -> Dict[str, PersonalRecord]:
        return await self._read_or_default(
            StorageKeys.PERSONAL_RECORDS, _parse_records, dict
        )

    async def update(self, record: PersonalRecord) -> bool:
        """
        Store record if it is the first for its exercise or an improvement.

        Returns:
            True if the record replaced the stored one
        """
        records = await self.get_all()
        existing = records.get(record.exercise_id)

        if existing is not None and not is_improvement(record, existing):
            return False

        records[record.exercise_id] = record
        saved = await self._write(
            StorageKeys.PERSONAL_RECORDS,
            {key: value.to_storage() for key, value in records.items()},
        )
        if saved:
            self.logger.info(f"New personal record for {record.exercise_name}")
        return saved
