"""
User statistics and the workout-completion transaction.

Handles:
- Loading/saving the single UserStats record
- Streak continuity across calendar days
- XP awards and level derivation
- Fanning a completed workout out to daily challenges and achievements
"""

from datetime import date, timedelta
from typing import TYPE_CHECKING, Any, Optional

from .base import BaseService
from .history_service import WorkoutHistoryLog
from ..exceptions import WorkoutValidationError
from ..models.progress import ChallengeType, LevelInfo, UserStats
from ..storage.base import KeyValueStore, StorageKeys
from ..utils.dates import Clock, day_key, days_between, parse_calendar_date

if TYPE_CHECKING:
    from .achievement_service import AchievementEvaluator
    from .challenge_service import DailyChallengeService


XP_PER_LEVEL = 1000
BASE_WORKOUT_XP = 50
XP_PER_MINUTE = 2
STREAK_BONUS_PER_DAY = 10
MAX_STREAK_BONUS = 100
MAX_STREAK_BONUS_DAYS = 7


# =============================================================================
# Helper Functions
# =============================================================================

def calculate_level(experience: int) -> int:
    """Level for a given XP total: one level per 1000 XP, starting at 1."""
    return max(experience, 0) // XP_PER_LEVEL + 1


def level_progress(experience: int) -> LevelInfo:
    """
    Position inside the current level.

    Args:
        experience: Total XP earned

    Returns:
        LevelInfo with XP earned in the level and XP still needed
    """
    experience = max(experience, 0)
    xp_in_level = experience % XP_PER_LEVEL
    return LevelInfo(
        level=calculate_level(experience),
        xp_in_level=xp_in_level,
        xp_for_next=XP_PER_LEVEL - xp_in_level,
        progress_percent=round(xp_in_level / XP_PER_LEVEL * 100, 1),
    )


def next_streak(current_streak: int, last_workout: Optional[date], today: date) -> int:
    """
    Streak after working out on ``today``.

    - No previous workout: 1
    - Previous workout yesterday: current + 1
    - Previous workout today: unchanged
    - Gap of more than one day: 1
    - Previous workout in the future (clock moved back): unchanged
    """
    if last_workout is None:
        return 1
    gap = days_between(last_workout, today)
    if gap == 1:
        return current_streak + 1
    if gap > 1:
        return 1
    if gap == 0:
        return max(current_streak, 1)
    return current_streak


def workout_experience(minutes: int, streak: int) -> int:
    """XP for one workout: base + per-minute + streak bonus."""
    if streak >= MAX_STREAK_BONUS_DAYS:
        streak_bonus = MAX_STREAK_BONUS
    else:
        streak_bonus = streak * STREAK_BONUS_PER_DAY
    return BASE_WORKOUT_XP + minutes * XP_PER_MINUTE + streak_bonus


def _parse_stats(raw: Any) -> UserStats:
    return UserStats.model_validate(raw)


class UserStatsManager(BaseService):
    """
    Owner of the UserStats record.

    Challenge and achievement collaborators are optional; ``bind`` them to
    have ``record_workout`` drive daily-challenge progress and achievement
    evaluation.
    """

    def __init__(
        self,
        store: KeyValueStore,
        history: WorkoutHistoryLog,
        clock: Optional[Clock] = None,
    ) -> None:
        super().__init__(store, clock=clock)
        self._history = history
        self._challenges: Optional["DailyChallengeService"] = None
        self._achievements: Optional["AchievementEvaluator"] = None

    def bind(
        self,
        challenges: Optional["DailyChallengeService"] = None,
        achievements: Optional["AchievementEvaluator"] = None,
    ) -> None:
        """Attach the services notified after each recorded workout."""
        self._challenges = challenges
        self._achievements = achievements

    def default_stats(self) -> UserStats:
        """Zero-valued stats joined now."""
        return UserStats(join_date=self.now())

    async def get_stats(self) -> UserStats:
        """Persisted stats, or fresh defaults when absent or unreadable."""
        return await self._read_or_default(
            StorageKeys.USER_STATS, _parse_stats, self.default_stats
        )

    async def set_stats(self, stats: UserStats) -> bool:
        """Overwrite the persisted stats. Returns False if the write failed."""
        return await self._write(StorageKeys.USER_STATS, stats.to_storage())

    async def award_experience(self, amount: int, source: str) -> UserStats:
        """
        Add XP to the persisted stats and recompute the level.

        Args:
            amount: XP to add
            source: Description of the XP source, for logging

        Returns:
            The updated stats
        """
        stats = await self.get_stats()
        old_level = stats.level
        stats.experience += amount
        stats.level = calculate_level(stats.experience)
        await self.set_stats(stats)

        self.logger.info(f"Added {amount} XP from {source}. Total: {stats.experience}")
        if stats.level > old_level:
            self.logger.info(f"Level up! {old_level} -> {stats.level}")
        return stats

    async def record_workout(self, calories: int, minutes: int = 0) -> UserStats:
        """
        Record a completed workout.

        Updates counters, streak, rolling weekly/monthly counts, XP and
        level; persists; then advances the daily challenge and evaluates
        achievements.

        Args:
            calories: Calories burned (>= 0)
            minutes: Minutes exercised (>= 0)

        Returns:
            Stats after all XP from the workout, the challenge and any
            unlocked achievements has been applied
        """
        if calories < 0:
            raise WorkoutValidationError("calories must not be negative", field="calories")
        if minutes < 0:
            raise WorkoutValidationError("minutes must not be negative", field="minutes")

        stats = await self.get_stats()
        now = self.now()
        today = now.date()

        last_workout = parse_calendar_date(stats.last_workout_date)
        new_streak = next_streak(stats.current_streak, last_workout, today)
        streak_increased = new_streak > stats.current_streak

        # The in-flight workout is not in the history yet
        weekly = await self._history.count_since(now - timedelta(days=7)) + 1
        monthly = await self._history.count_since(now - timedelta(days=30)) + 1

        experience = stats.experience + workout_experience(minutes, new_streak)

        updated = stats.model_copy(update={
            "total_workouts": stats.total_workouts + 1,
            "total_calories": stats.total_calories + calories,
            "total_minutes": stats.total_minutes + minutes,
            "current_streak": new_streak,
            "best_streak": max(stats.best_streak, new_streak),
            "last_workout_date": day_key(today),
            "weekly_workouts": weekly,
            "monthly_workouts": monthly,
            "experience": experience,
            "level": calculate_level(experience),
        })
        await self.set_stats(updated)

        if self._challenges is not None:
            progress = [
                (ChallengeType.WORKOUTS, 1),
                (ChallengeType.CALORIES, calories),
                (ChallengeType.MINUTES, minutes),
            ]
            if streak_increased:
                progress.append((ChallengeType.STREAK, new_streak))

            bonus = 0
            for challenge_type, amount in progress:
                update = await self._challenges.update_progress(challenge_type, amount)
                bonus += update.experience_awarded

            # Applied in memory: the stored copy may be stale if a write failed
            if bonus:
                updated.experience += bonus
                updated.level = calculate_level(updated.experience)

        if self._achievements is not None:
            await self._achievements.evaluate(updated)

        return updated

    async def reset_stats(self, include_achievements: bool = False) -> UserStats:
        """
        Restore zero defaults with a new join date.

        The achievement catalog keeps its unlocked state unless
        include_achievements is set.
        """
        stats = self.default_stats()
        await self.set_stats(stats)
        if include_achievements and self._achievements is not None:
            await self._achievements.reset()
        self.logger.info("User stats reset")
        return stats
