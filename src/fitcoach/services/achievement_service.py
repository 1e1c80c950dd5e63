"""
Achievement service for gamification features.

Handles:
- The fixed achievement catalog and its persisted unlock state
- Evaluating stats against the catalog and unlocking new achievements
- XP rewards and the unlocked-achievement counter on UserStats
"""

from typing import Any, Callable, Dict, List, Optional

from .base import BaseService
from .stats_service import UserStatsManager, calculate_level
from ..models.progress import Achievement, UserStats
from ..storage.base import KeyValueStore, StorageKeys
from ..utils.dates import Clock


# =============================================================================
# Default Achievement Definitions
# =============================================================================

DEFAULT_ACHIEVEMENTS: List[Dict[str, Any]] = [
    {
        "id": "first_workout",
        "title": "First Step",
        "description": "Complete your first workout",
        "icon": "play",
        "category": "Getting Started",
        "requirement": 1,
        "rarity": "common",
        "experience": 50,
    },
    {
        "id": "week_warrior",
        "title": "Week Warrior",
        "description": "Complete 7 workouts in a week",
        "icon": "calendar",
        "category": "Consistency",
        "requirement": 7,
        "rarity": "rare",
        "experience": 200,
    },
    {
        "id": "calorie_crusher",
        "title": "Calorie Crusher",
        "description": "Burn 1000 calories total",
        "icon": "flame",
        "category": "Endurance",
        "requirement": 1000,
        "rarity": "rare",
        "experience": 150,
    },
    {
        "id": "streak_master",
        "title": "Streak Master",
        "description": "Maintain a 30-day streak",
        "icon": "trophy",
        "category": "Dedication",
        "requirement": 30,
        "rarity": "epic",
        "experience": 500,
    },
    {
        "id": "century_club",
        "title": "Century Club",
        "description": "Complete 100 workouts",
        "icon": "award",
        "category": "Milestone",
        "requirement": 100,
        "rarity": "legendary",
        "experience": 1000,
    },
    {
        "id": "time_master",
        "title": "Time Master",
        "description": "Exercise for 1000 minutes total",
        "icon": "clock",
        "category": "Endurance",
        "requirement": 1000,
        "rarity": "epic",
        "experience": 300,
    },
    {
        "id": "level_up",
        "title": "Level Up",
        "description": "Reach level 5",
        "icon": "star",
        "category": "Progress",
        "requirement": 5,
        "rarity": "rare",
        "experience": 250,
    },
]

# Which stat each achievement measures.
ACHIEVEMENT_PROGRESS: Dict[str, Callable[[UserStats], int]] = {
    "first_workout": lambda stats: stats.total_workouts,
    "week_warrior": lambda stats: stats.weekly_workouts,
    "calorie_crusher": lambda stats: stats.total_calories,
    "streak_master": lambda stats: stats.current_streak,
    "century_club": lambda stats: stats.total_workouts,
    "time_master": lambda stats: stats.total_minutes,
    "level_up": lambda stats: stats.level,
}


def initial_achievements() -> List[Achievement]:
    """Fresh catalog with nothing unlocked."""
    catalog = []
    for definition in DEFAULT_ACHIEVEMENTS:
        achievement = Achievement.model_validate(definition)
        # Level starts at 1, so level_up begins with visible progress
        if achievement.id == "level_up":
            achievement.current = 1
        catalog.append(achievement)
    return catalog


def _parse_catalog(raw: Any) -> List[Achievement]:
    if not isinstance(raw, list):
        raise ValueError("achievement catalog is not a list")
    return [Achievement.model_validate(item) for item in raw]


class AchievementEvaluator(BaseService):
    """
    Evaluates stats against the achievement catalog.

    Unlocking is one-way: an unlocked achievement is never re-evaluated,
    so its XP is granted exactly once.
    """

    def __init__(
        self,
        store: KeyValueStore,
        stats: UserStatsManager,
        clock: Optional[Clock] = None,
    ) -> None:
        super().__init__(store, clock=clock)
        self._stats = stats

    async def get_achievements(self) -> List[Achievement]:
        """
        The catalog with live progress and unlock state.

        Initializes and stores the catalog on first access. Catalog entries
        added since the stored copy was written are appended.
        """
        result = await self._read(StorageKeys.ACHIEVEMENTS)
        if result.is_error:
            self.logger.error(f"Error getting achievements: {result.error}")
            return initial_achievements()

        if result.is_ok:
            try:
                stored = _parse_catalog(result.value)
            except ValueError as e:
                self.logger.error(f"Discarding malformed achievements: {e}")
            else:
                known = {achievement.id for achievement in stored}
                missing = [a for a in initial_achievements() if a.id not in known]
                if missing:
                    stored.extend(missing)
                    await self._save(stored)
                return stored

        catalog = initial_achievements()
        await self._save(catalog)
        self.logger.info(f"Seeded {len(catalog)} achievements")
        return catalog

    async def _save(self, catalog: List[Achievement]) -> bool:
        return await self._write(
            StorageKeys.ACHIEVEMENTS,
            [achievement.to_storage() for achievement in catalog],
        )

    async def evaluate(self, stats: UserStats) -> List[Achievement]:
        """
        Unlock every achievement the stats now satisfy.

        ``stats`` is updated in place with the XP, level and achievement
        count of the new unlocks. The catalog is saved first, then the
        stats (only when something unlocked).

        Args:
            stats: Current user stats

        Returns:
            Achievements unlocked by this call
        """
        catalog = await self.get_achievements()
        newly_unlocked: List[Achievement] = []

        for achievement in catalog:
            if achievement.unlocked:
                continue

            progress = ACHIEVEMENT_PROGRESS.get(achievement.id)
            if progress is None:
                continue

            achievement.current = progress(stats)

            if achievement.current >= achievement.requirement:
                achievement.unlocked = True
                achievement.unlocked_at = self.now()
                newly_unlocked.append(achievement)

                stats.experience += achievement.experience
                stats.level = calculate_level(stats.experience)
                stats.achievements += 1

                self.logger.info(f"Achievement unlocked: {achievement.title}")

        await self._save(catalog)

        if newly_unlocked:
            await self._stats.set_stats(stats)

        return newly_unlocked

    async def recent_unlocked(self, limit: int = 3) -> List[Achievement]:
        """Unlocked achievements, most recent first."""
        catalog = await self.get_achievements()
        unlocked = [a for a in catalog if a.unlocked and a.unlocked_at is not None]
        unlocked.sort(key=lambda a: a.unlocked_at, reverse=True)
        return unlocked[:limit]

    async def reset(self) -> List[Achievement]:
        """Restore the catalog to its initial, fully locked state."""
        catalog = initial_achievements()
        await self._save(catalog)
        self.logger.info("Achievement catalog reset")
        return catalog
