"""
Service layer for fitcoach.

Each service sits directly on an injected key-value store; the
ProgressionEngine wires them together.
"""

from .base import BaseService
from .history_service import HISTORY_LIMIT, WorkoutHistoryLog, parse_duration_to_minutes
from .stats_service import (
    UserStatsManager,
    calculate_level,
    level_progress,
    next_streak,
    workout_experience,
)
from .challenge_service import (
    CHALLENGE_COMPLETION_XP,
    ChallengeUpdate,
    DailyChallengeService,
    challenge_for,
)
from .achievement_service import AchievementEvaluator, initial_achievements
from .library_service import FavoritesStore, PersonalRecordsStore
from .settings_service import AppSettingsService
from .progression import ProgressionEngine

__all__ = [
    "AchievementEvaluator",
    "AppSettingsService",
    "BaseService",
    "CHALLENGE_COMPLETION_XP",
    "ChallengeUpdate",
    "DailyChallengeService",
    "FavoritesStore",
    "HISTORY_LIMIT",
    "PersonalRecordsStore",
    "ProgressionEngine",
    "UserStatsManager",
    "WorkoutHistoryLog",
    "calculate_level",
    "challenge_for",
    "initial_achievements",
    "level_progress",
    "next_streak",
    "parse_duration_to_minutes",
    "workout_experience",
]
