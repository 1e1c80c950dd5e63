"""
Daily challenge generation and progress tracking.

One challenge exists per calendar day. It is generated lazily the first
time it is requested on a new day, replacing the previous day's challenge.
"""

import random
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

from .base import BaseService
from .stats_service import UserStatsManager
from ..exceptions import ChallengeTypeError
from ..models.progress import ChallengeType, DailyChallenge
from ..storage.base import KeyValueStore, StorageKeys
from ..utils.dates import Clock, day_key


CHALLENGE_COMPLETION_XP = 100


# =============================================================================
# Challenge Templates
# =============================================================================

CHALLENGE_TEMPLATES: List[Dict[str, Any]] = [
    {
        "type": ChallengeType.WORKOUTS,
        "title": "Workout Warrior",
        "description": "Complete 2 workouts today",
        "target": 2,
        "icon": "dumbbell",
        "reward": "100 XP",
    },
    {
        "type": ChallengeType.CALORIES,
        "title": "Calorie Crusher",
        "description": "Burn 300 calories today",
        "target": 300,
        "icon": "flame",
        "reward": "150 XP",
    },
    {
        "type": ChallengeType.MINUTES,
        "title": "Time Master",
        "description": "Exercise for 30 minutes today",
        "target": 30,
        "icon": "clock",
        "reward": "120 XP",
    },
    {
        "type": ChallengeType.STREAK,
        "title": "Consistency King",
        "description": "Maintain your workout streak",
        # Target depends on the current streak, see challenge_for()
        "target": None,
        "icon": "trophy",
        "reward": "200 XP",
    },
]


def challenge_for(
    day: date,
    prior: Optional[DailyChallenge],
    current_streak: int = 0,
    rng: Optional[random.Random] = None,
) -> DailyChallenge:
    """
    The challenge for a calendar day.

    Returns prior unchanged when it already belongs to day; otherwise picks
    one template uniformly at random and starts it at zero progress.

    Args:
        day: Calendar day to get the challenge for
        prior: The currently stored challenge, if any
        current_streak: User's streak, sets the streak challenge target
        rng: Random source (module random if not given)
    """
    key = day_key(day)
    if prior is not None and prior.date == key:
        return prior

    template = (rng or random).choice(CHALLENGE_TEMPLATES)
    target = template["target"]
    if template["type"] is ChallengeType.STREAK:
        target = max(current_streak + 1, 2)

    return DailyChallenge(
        id=f"{key}-{template['type'].value}",
        title=template["title"],
        description=template["description"],
        type=template["type"],
        target=target,
        current=0,
        reward=template["reward"],
        completed=False,
        date=key,
        icon=template["icon"],
    )


@dataclass
class ChallengeUpdate:
    """Result of a progress update."""

    challenge: DailyChallenge
    just_completed: bool = False
    experience_awarded: int = 0


class DailyChallengeService(BaseService):
    """Generates the day's challenge and tracks progress toward it."""

    def __init__(
        self,
        store: KeyValueStore,
        stats: UserStatsManager,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(store, clock=clock)
        self._stats = stats
        self._rng = rng or random.Random()

    async def _load(self) -> Optional[DailyChallenge]:
        return await self._read_or_default(
            StorageKeys.DAILY_CHALLENGE,
            DailyChallenge.model_validate,
            lambda: None,
        )

    async def get_daily_challenge(self) -> DailyChallenge:
        """Today's challenge, generating and storing a new one on day rollover."""
        today = self.now().date()
        prior = await self._load()
        if prior is not None and prior.date == day_key(today):
            return prior

        stats = await self._stats.get_stats()
        challenge = challenge_for(today, prior, stats.current_streak, self._rng)
        await self._write(StorageKeys.DAILY_CHALLENGE, challenge.to_storage())
        self.logger.info(f"New daily challenge for {challenge.date}: {challenge.title}")
        return challenge

    async def update_progress(self, challenge_type: ChallengeType, amount: int) -> ChallengeUpdate:
        """
        Advance today's challenge.

        Non-matching types and already completed challenges are left alone.
        Progress is clamped at the target; reaching it marks the challenge
        completed and grants CHALLENGE_COMPLETION_XP.

        Raises:
            ChallengeTypeError: If challenge_type is not a ChallengeType value
        """
        try:
            challenge_type = ChallengeType(challenge_type)
        except ValueError:
            raise ChallengeTypeError(challenge_type)
        challenge = await self.get_daily_challenge()

        if challenge.type is not challenge_type or challenge.completed:
            return ChallengeUpdate(challenge=challenge)

        challenge.current = max(0, min(challenge.current + amount, challenge.target))
        challenge.completed = challenge.current >= challenge.target

        if challenge.completed:
            await self._stats.award_experience(
                CHALLENGE_COMPLETION_XP, f"daily challenge '{challenge.title}'"
            )

        await self._write(StorageKeys.DAILY_CHALLENGE, challenge.to_storage())
        return ChallengeUpdate(
            challenge=challenge,
            just_completed=challenge.completed,
            experience_awarded=CHALLENGE_COMPLETION_XP if challenge.completed else 0,
        )
