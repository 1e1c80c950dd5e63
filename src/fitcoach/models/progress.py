"""Progression data models: stats, history, daily challenges and achievements."""

from datetime import datetime
from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.dates import to_local_naive


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


class CamelModel(BaseModel):
    """Base model persisted and served with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_storage(self) -> dict:
        """Serialize to the JSON-compatible dict written to the key-value store."""
        return self.model_dump(by_alias=True, mode="json")


class ChallengeType(str, Enum):
    """What a daily challenge counts."""
    WORKOUTS = "workouts"
    CALORIES = "calories"
    MINUTES = "minutes"
    STREAK = "streak"


class AchievementRarity(str, Enum):
    """Rarity levels for achievements."""
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class UserStats(CamelModel):
    """Aggregate progression counters, one record per installation."""

    total_workouts: int = Field(default=0, ge=0, description="Completed workouts")
    total_calories: int = Field(default=0, ge=0, description="Calories burned in total")
    total_minutes: int = Field(default=0, ge=0, description="Minutes exercised in total")
    current_streak: int = Field(default=0, ge=0, description="Consecutive workout days")
    best_streak: int = Field(default=0, ge=0, description="Longest streak reached")
    last_workout_date: Optional[str] = Field(None, description="Calendar date of the last workout")
    weekly_workouts: int = Field(default=0, ge=0, description="Workouts in the trailing 7 days")
    monthly_workouts: int = Field(default=0, ge=0, description="Workouts in the trailing 30 days")
    level: int = Field(default=1, ge=1, description="Level derived from experience")
    experience: int = Field(default=0, ge=0, description="Total experience points")
    join_date: datetime = Field(default_factory=datetime.now, description="When the record was created")
    achievements: int = Field(default=0, ge=0, description="Number of unlocked achievements")

    @field_validator("join_date")
    @classmethod
    def normalize_join_date(cls, value: datetime) -> datetime:
        return to_local_naive(value)


class WorkoutHistory(CamelModel):
    """A completed workout in the history log."""

    id: str = Field(..., description="Creation-time identifier")
    video_id: str = Field(..., description="Catalog video identifier")
    title: str = Field(..., description="Workout title")
    duration: str = Field(..., description="Display duration, M:SS or H:MM:SS")
    minutes: int = Field(default=0, ge=0, description="Minutes parsed from duration")
    calories: int = Field(default=0, ge=0, description="Calories burned")
    category: str = Field(default="General", description="Workout category")
    difficulty: str = Field(default="Intermediate", description="Workout difficulty")
    completed_at: datetime = Field(..., description="When the workout was completed")

    @field_validator("completed_at")
    @classmethod
    def normalize_completed_at(cls, value: datetime) -> datetime:
        return to_local_naive(value)


class WorkoutEntry(CamelModel):
    """History input before the log assigns id, minutes and timestamp."""

    video_id: str
    title: str
    duration: str
    calories: int = Field(default=0, ge=0)
    category: str = "General"
    difficulty: str = "Intermediate"


class DayProgress(CamelModel):
    """Per-weekday aggregate for the weekly progress chart."""

    day: str
    workouts: int = 0
    calories: int = 0
    minutes: int = 0


class DailyChallenge(CamelModel):
    """The single challenge active for a calendar day."""

    id: str = Field(..., description="Challenge identifier")
    title: str = Field(..., description="Display title")
    description: str = Field(..., description="What to do")
    type: ChallengeType = Field(..., description="What the challenge counts")
    target: int = Field(..., ge=1, description="Amount needed to complete")
    current: int = Field(default=0, ge=0, description="Progress so far, never above target")
    reward: str = Field(..., description="Reward label shown to the user")
    completed: bool = Field(default=False, description="Whether the target was reached")
    date: str = Field(..., description="Calendar date (YYYY-MM-DD) the challenge belongs to")
    icon: str = Field(default="trophy", description="Icon name")


class Achievement(CamelModel):
    """Achievement catalog entry with its live unlock state."""

    id: str = Field(..., description="Unique achievement identifier")
    title: str = Field(..., description="Display name of the achievement")
    description: str = Field(..., description="Description of how to unlock")
    icon: str = Field(..., description="Icon name")
    category: str = Field(..., description="Achievement category")
    requirement: int = Field(..., ge=1, description="Threshold to unlock")
    current: int = Field(default=0, ge=0, description="Last evaluated progress value")
    unlocked: bool = Field(default=False, description="Whether it has been unlocked")
    unlocked_at: Optional[datetime] = Field(None, description="When it was unlocked")
    rarity: AchievementRarity = Field(default=AchievementRarity.COMMON, description="Rarity level")
    experience: int = Field(default=0, ge=0, description="XP awarded when unlocked")

    @field_validator("unlocked_at")
    @classmethod
    def normalize_unlocked_at(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_local_naive(value) if value is not None else None


class LevelInfo(CamelModel):
    """Where a user sits inside their current level."""

    level: int
    xp_in_level: int
    xp_for_next: int
    progress_percent: float


class WorkoutCompletion(CamelModel):
    """A finished workout as reported by a client."""

    video_id: str = Field(..., description="Catalog video identifier")
    title: str = Field(..., description="Workout title")
    duration: str = Field(..., description="Display duration, M:SS or H:MM:SS")
    calories: int = Field(default=150, ge=0, description="Calories burned")
    minutes: Optional[int] = Field(
        None, ge=0, description="Minutes exercised; defaults to the duration's minutes"
    )
    category: str = Field(default="General")
    difficulty: str = Field(default="Intermediate")


class WorkoutResult(CamelModel):
    """Outcome of a completed workout."""

    stats: UserStats
    entry: Optional[WorkoutHistory] = None
    challenge: Optional[DailyChallenge] = None
    new_achievements: List[Achievement] = Field(default_factory=list)
