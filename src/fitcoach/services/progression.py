"""
Progression engine.

Wires the progression stores over one key-value store and one clock, and
runs the workout-completion flow as a single writer.
"""

import asyncio
import logging
import random
from typing import Optional

from .achievement_service import AchievementEvaluator
from .challenge_service import DailyChallengeService
from .history_service import WorkoutHistoryLog, parse_duration_to_minutes
from .library_service import FavoritesStore, PersonalRecordsStore
from .settings_service import AppSettingsService
from .stats_service import UserStatsManager
from ..models.progress import UserStats, WorkoutCompletion, WorkoutEntry, WorkoutResult
from ..storage.base import KeyValueStore
from ..utils.dates import Clock


logger = logging.getLogger(__name__)


class ProgressionEngine:
    """
    All progression stores sharing one store and clock.

    Workout completion and reset go through an asyncio.Lock so two rapid
    completions cannot read the same stats snapshot and lose an increment.
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.store = store
        self.history = WorkoutHistoryLog(store, clock=clock)
        self.stats = UserStatsManager(store, self.history, clock=clock)
        self.challenges = DailyChallengeService(store, self.stats, clock=clock, rng=rng)
        self.achievements = AchievementEvaluator(store, self.stats, clock=clock)
        self.stats.bind(challenges=self.challenges, achievements=self.achievements)

        self.favorites = FavoritesStore(store, clock=clock)
        self.records = PersonalRecordsStore(store, clock=clock)
        self.settings = AppSettingsService(store, clock=clock)

        self._write_lock = asyncio.Lock()

    async def complete_workout(self, completion: WorkoutCompletion) -> WorkoutResult:
        """
        Record a finished workout and log it to the history.

        Stats are recorded before the history entry is appended, so the
        rolling weekly/monthly counts see the workout exactly once.
        """
        minutes = completion.minutes
        if minutes is None:
            minutes = parse_duration_to_minutes(completion.duration)

        async with self._write_lock:
            before = await self.achievements.get_achievements()
            locked_before = {a.id for a in before if not a.unlocked}

            stats = await self.stats.record_workout(completion.calories, minutes)
            entry = await self.history.append(WorkoutEntry(
                video_id=completion.video_id,
                title=completion.title,
                duration=completion.duration,
                calories=completion.calories,
                category=completion.category,
                difficulty=completion.difficulty,
            ))
            challenge = await self.challenges.get_daily_challenge()
            after = await self.achievements.get_achievements()

        new_achievements = [a for a in after if a.unlocked and a.id in locked_before]
        logger.info(
            f"Workout completed: {completion.title} "
            f"(level {stats.level}, {stats.experience} XP, streak {stats.current_streak})"
        )
        return WorkoutResult(
            stats=stats,
            entry=entry,
            challenge=challenge,
            new_achievements=new_achievements,
        )

    async def reset(self, include_achievements: bool = False) -> UserStats:
        """Reset stats (and optionally the achievement catalog)."""
        async with self._write_lock:
            return await self.stats.reset_stats(include_achievements=include_achievements)
