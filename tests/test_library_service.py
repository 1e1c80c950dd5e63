"""Tests for favorites, personal records and app settings."""

import pytest

from fitcoach.models.library import FavoriteVideo, PersonalRecord
from fitcoach.services.library_service import (
    FavoritesStore,
    PersonalRecordsStore,
    RemoveOutcome,
    is_improvement,
)
from fitcoach.services.settings_service import AppSettingsService
from fitcoach.storage.base import StorageKeys


@pytest.fixture
def favorites(store, clock):
    return FavoritesStore(store, clock=clock)


@pytest.fixture
def records(store, clock):
    return PersonalRecordsStore(store, clock=clock)


@pytest.fixture
def app_settings(store, clock):
    return AppSettingsService(store, clock=clock)


def make_video(video_id: str = "hiit_1") -> FavoriteVideo:
    return FavoriteVideo(
        id=video_id,
        video_id="gBXUvbJBIiI",
        title="20 Min HIIT Tabata Workout",
        channel_title="FitnessBlender",
        duration="20:15",
    )


def make_record(**overrides) -> PersonalRecord:
    values = {
        "exercise_id": "plank",
        "exercise_name": "Plank",
        "best_time": 60.0,
        "max_reps": 0,
    }
    values.update(overrides)
    return PersonalRecord(**values)


class TestFavorites:
    """Tests for FavoritesStore."""

    @pytest.mark.asyncio
    async def test_add_and_list(self, favorites, clock):
        assert await favorites.add(make_video()) is True

        saved = await favorites.list()
        assert len(saved) == 1
        assert saved[0].added_at == clock()
        assert await favorites.is_favorited("hiit_1") is True

    @pytest.mark.asyncio
    async def test_duplicate_ignored(self, favorites):
        await favorites.add(make_video())

        assert await favorites.add(make_video()) is False
        assert len(await favorites.list()) == 1

    @pytest.mark.asyncio
    async def test_remove(self, favorites):
        await favorites.add(make_video("hiit_1"))
        await favorites.add(make_video("yoga_1"))

        assert await favorites.remove("hiit_1") == RemoveOutcome.REMOVED
        assert await favorites.remove("hiit_1") == RemoveOutcome.NOT_FOUND
        assert [f.id for f in await favorites.list()] == ["yoga_1"]

    @pytest.mark.asyncio
    async def test_remove_write_failure_is_not_absence(self, write_failing_store, clock):
        favorites = FavoritesStore(write_failing_store, clock=clock)
        await write_failing_store.inner.set(
            StorageKeys.FAVORITE_VIDEOS, [make_video("hiit_1").to_storage()]
        )

        assert await favorites.remove("hiit_1") == RemoveOutcome.NOT_SAVED
        assert await favorites.remove("yoga_1") == RemoveOutcome.NOT_FOUND
        assert await favorites.is_favorited("hiit_1")

    @pytest.mark.asyncio
    async def test_empty_when_unreadable(self, failing_store, clock):
        assert await FavoritesStore(failing_store, clock=clock).list() == []


class TestPersonalRecords:
    """Tests for PersonalRecordsStore."""

    def test_is_improvement(self):
        existing = make_record(best_time=60.0, max_reps=10, max_weight=20.0)

        assert is_improvement(make_record(best_time=55.0, max_reps=10, max_weight=20.0), existing)
        assert is_improvement(make_record(best_time=60.0, max_reps=12, max_weight=20.0), existing)
        assert is_improvement(make_record(best_time=60.0, max_reps=10, max_weight=25.0), existing)
        assert not is_improvement(make_record(best_time=65.0, max_reps=8), existing)

    def test_weight_beats_missing_weight(self):
        assert is_improvement(make_record(max_weight=10.0), make_record())

    @pytest.mark.asyncio
    async def test_first_record_stored(self, records, store):
        assert await records.update(make_record()) is True

        raw = await store.get(StorageKeys.PERSONAL_RECORDS)
        assert raw["plank"]["exerciseName"] == "Plank"

    @pytest.mark.asyncio
    async def test_worse_result_kept_out(self, records):
        await records.update(make_record(best_time=50.0))

        assert await records.update(make_record(best_time=70.0)) is False
        assert (await records.get_all())["plank"].best_time == 50.0

    @pytest.mark.asyncio
    async def test_better_result_replaces(self, records):
        await records.update(make_record(best_time=50.0))

        assert await records.update(make_record(best_time=45.0)) is True
        assert (await records.get_all())["plank"].best_time == 45.0


class TestAppSettings:
    """Tests for AppSettingsService."""

    @pytest.mark.asyncio
    async def test_defaults(self, app_settings):
        current = await app_settings.get()

        assert current.dark_mode is False
        assert current.theme == "light"

    @pytest.mark.asyncio
    async def test_update_merges(self, app_settings, store):
        await app_settings.update({"darkMode": True})
        updated = await app_settings.update({"theme": "dark", "language": "es"})

        assert updated.dark_mode is True
        assert updated.theme == "dark"

        raw = await store.get(StorageKeys.APP_SETTINGS)
        assert raw["darkMode"] is True
        assert raw["language"] == "es"
        assert raw["notifications"] is True
