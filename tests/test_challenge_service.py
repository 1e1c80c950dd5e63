"""Tests for daily challenge generation and progress tracking."""

from datetime import date

import pytest

from fitcoach.exceptions import ChallengeTypeError, ErrorCode
from fitcoach.models.progress import ChallengeType, DailyChallenge
from fitcoach.services.challenge_service import (
    CHALLENGE_COMPLETION_XP,
    DailyChallengeService,
    challenge_for,
)
from fitcoach.services.history_service import WorkoutHistoryLog
from fitcoach.services.stats_service import UserStatsManager
from fitcoach.storage.base import StorageKeys


class Pick:
    """Random source that picks a fixed index."""

    def __init__(self, index: int) -> None:
        self.index = index

    def choice(self, seq):
        return seq[self.index]


@pytest.fixture
def stats(store, clock):
    return UserStatsManager(store, WorkoutHistoryLog(store, clock=clock), clock=clock)


def make_service(store, stats, clock, index: int) -> DailyChallengeService:
    return DailyChallengeService(store, stats, clock=clock, rng=Pick(index))


class TestChallengeFor:
    """Tests for the pure challenge generator."""

    day = date(2026, 10, 19)

    def test_generates_from_template(self):
        challenge = challenge_for(self.day, None, rng=Pick(1))

        assert challenge.type is ChallengeType.CALORIES
        assert challenge.target == 300
        assert challenge.current == 0
        assert challenge.completed is False
        assert challenge.date == "2026-10-19"
        assert challenge.id == "2026-10-19-calories"

    def test_keeps_challenge_of_same_day(self):
        prior = challenge_for(self.day, None, rng=Pick(0))
        prior.current = 1

        assert challenge_for(self.day, prior, rng=Pick(2)) is prior

    def test_replaces_challenge_of_other_day(self):
        prior = challenge_for(date(2026, 10, 18), None, rng=Pick(0))

        challenge = challenge_for(self.day, prior, rng=Pick(2))

        assert challenge.type is ChallengeType.MINUTES
        assert challenge.date == "2026-10-19"

    @pytest.mark.parametrize("streak,target", [(0, 2), (1, 2), (5, 6)])
    def test_streak_target_follows_streak(self, streak, target):
        challenge = challenge_for(self.day, None, current_streak=streak, rng=Pick(3))

        assert challenge.type is ChallengeType.STREAK
        assert challenge.target == target


class TestDailyChallengeService:
    """Tests for DailyChallengeService."""

    @pytest.mark.asyncio
    async def test_generated_once_per_day(self, store, stats, clock):
        service = make_service(store, stats, clock, 0)

        first = await service.get_daily_challenge()
        service._rng = Pick(1)
        second = await service.get_daily_challenge()

        assert first.id == second.id
        raw = await store.get(StorageKeys.DAILY_CHALLENGE)
        assert raw["date"] == "2026-10-19"

    @pytest.mark.asyncio
    async def test_rolls_over_on_new_day(self, store, stats, clock):
        service = make_service(store, stats, clock, 0)
        await service.update_progress(ChallengeType.WORKOUTS, 1)

        clock.advance(days=1)
        challenge = await service.get_daily_challenge()

        assert challenge.date == "2026-10-20"
        assert challenge.current == 0

    @pytest.mark.asyncio
    async def test_mismatched_type_is_noop(self, store, stats, clock):
        service = make_service(store, stats, clock, 0)

        update = await service.update_progress(ChallengeType.CALORIES, 500)

        assert update.just_completed is False
        assert update.challenge.current == 0

    @pytest.mark.asyncio
    async def test_progress_clamped_at_target(self, store, stats, clock):
        service = make_service(store, stats, clock, 1)

        update = await service.update_progress(ChallengeType.CALORIES, 450)

        assert update.challenge.current == 300
        assert update.challenge.completed is True
        assert update.just_completed is True

    @pytest.mark.asyncio
    async def test_unknown_type_rejected(self, store, stats, clock):
        service = make_service(store, stats, clock, 0)

        with pytest.raises(ChallengeTypeError) as exc_info:
            await service.update_progress("pushups", 1)

        assert exc_info.value.code is ErrorCode.CHALLENGE_TYPE_INVALID
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_string_type_accepted(self, store, stats, clock):
        service = make_service(store, stats, clock, 1)

        update = await service.update_progress("calories", 120)

        assert update.challenge.current == 120

    @pytest.mark.asyncio
    async def test_negative_amount_clamped_at_zero(self, store, stats, clock):
        service = make_service(store, stats, clock, 2)

        update = await service.update_progress(ChallengeType.MINUTES, -10)

        assert update.challenge.current == 0

    @pytest.mark.asyncio
    async def test_completion_awards_experience_once(self, store, stats, clock):
        service = make_service(store, stats, clock, 0)

        await service.update_progress(ChallengeType.WORKOUTS, 1)
        assert (await stats.get_stats()).experience == 0

        update = await service.update_progress(ChallengeType.WORKOUTS, 1)
        assert update.just_completed is True
        assert (await stats.get_stats()).experience == CHALLENGE_COMPLETION_XP

        assert update.experience_awarded == CHALLENGE_COMPLETION_XP

        again = await service.update_progress(ChallengeType.WORKOUTS, 1)
        assert again.just_completed is False
        assert again.experience_awarded == 0
        assert again.challenge.current == 2
        assert (await stats.get_stats()).experience == CHALLENGE_COMPLETION_XP

    @pytest.mark.asyncio
    async def test_streak_challenge_uses_current_streak(self, store, stats, clock):
        await stats.record_workout(100, 10)
        clock.advance(days=1)
        await stats.record_workout(100, 10)

        service = make_service(store, stats, clock, 3)
        await store.set(StorageKeys.DAILY_CHALLENGE, None)
        challenge = await service.get_daily_challenge()

        assert challenge.target == 3

    @pytest.mark.asyncio
    async def test_malformed_challenge_regenerated(self, store, stats, clock):
        await store.set(StorageKeys.DAILY_CHALLENGE, {"garbage": True})
        service = make_service(store, stats, clock, 2)

        challenge = await service.get_daily_challenge()

        assert isinstance(challenge, DailyChallenge)
        assert challenge.type is ChallengeType.MINUTES
