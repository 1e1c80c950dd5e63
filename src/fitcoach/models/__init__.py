"""Data models for fitcoach."""

from .progress import (
    Achievement,
    AchievementRarity,
    CamelModel,
    ChallengeType,
    DailyChallenge,
    DayProgress,
    LevelInfo,
    UserStats,
    WorkoutCompletion,
    WorkoutEntry,
    WorkoutHistory,
    WorkoutResult,
    to_camel,
)
from .library import AppSettings, FavoriteVideo, PersonalRecord
from .coach import (
    ChatRequest,
    ChatResponse,
    Exercise,
    FormCheckRequest,
    NutritionRequest,
    PlanRequest,
    TextResponse,
    UserProfile,
    VideoSummary,
    WorkoutPlan,
)

__all__ = [
    "Achievement",
    "AchievementRarity",
    "AppSettings",
    "CamelModel",
    "ChallengeType",
    "ChatRequest",
    "ChatResponse",
    "DailyChallenge",
    "DayProgress",
    "Exercise",
    "FavoriteVideo",
    "FormCheckRequest",
    "LevelInfo",
    "NutritionRequest",
    "PersonalRecord",
    "PlanRequest",
    "TextResponse",
    "UserProfile",
    "UserStats",
    "VideoSummary",
    "WorkoutCompletion",
    "WorkoutEntry",
    "WorkoutHistory",
    "WorkoutPlan",
    "WorkoutResult",
    "to_camel",
]
