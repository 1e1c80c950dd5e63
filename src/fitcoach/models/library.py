"""Favorites, personal records and app settings models."""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field

from .progress import CamelModel, to_camel


class FavoriteVideo(CamelModel):
    """A catalog video saved by the user."""

    id: str = Field(..., description="Favorite key, the catalog id")
    video_id: str = Field(..., description="Playable video id")
    title: str
    thumbnail: str = ""
    channel_title: str = ""
    duration: str = ""
    added_at: Optional[datetime] = Field(None, description="Set when the favorite is stored")


class PersonalRecord(CamelModel):
    """Best result for one exercise."""

    exercise_id: str
    exercise_name: str
    best_time: float = Field(default=0, ge=0, description="Best time in seconds, lower is better")
    max_reps: int = Field(default=0, ge=0)
    max_weight: Optional[float] = Field(None, ge=0)
    achieved_at: datetime = Field(default_factory=datetime.now)
    category: str = "General"


class AppSettings(CamelModel):
    """Free-form user preferences. Unknown keys are kept as-is."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    dark_mode: bool = False
    theme: str = "light"
    notifications: bool = True
    preferred_difficulty: str = "all"
    preferred_duration: str = "all"
