"""Models for the external video catalog and the AI coach."""

from typing import Optional, List

from pydantic import Field

from .progress import CamelModel


class VideoSummary(CamelModel):
    """A workout video from the catalog."""

    id: str
    video_id: str
    title: str
    description: str = ""
    thumbnail: str = ""
    channel_title: str = ""
    published_at: Optional[str] = None
    duration: str = "0:00"
    view_count: str = "0"
    like_count: str = "0"
    category: str = "General"
    difficulty: str = "Intermediate"
    estimated_calories: int = 0


class Exercise(CamelModel):
    """One exercise inside a generated workout plan."""

    name: str
    sets: int = Field(default=3, ge=1)
    reps: str = "10-12"
    duration: Optional[str] = None
    rest_time: str = "60 seconds"
    form_tips: List[str] = Field(default_factory=list)
    modifications: List[str] = Field(default_factory=list)
    target_muscles: List[str] = Field(default_factory=list)


class WorkoutPlan(CamelModel):
    """A structured workout plan produced by the coach."""

    name: str
    duration: str
    difficulty: str
    calories: int = Field(default=0, ge=0)
    focus: str
    ai_insights: str = ""
    exercises: List[Exercise] = Field(default_factory=list)
    warmup: List[str] = Field(default_factory=list)
    cooldown: List[str] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)


class UserProfile(CamelModel):
    """What the coach knows about the user. All fields optional."""

    fitness_goal: Optional[str] = None
    experience_level: Optional[str] = None
    available_time: Optional[str] = None
    preferred_workouts: List[str] = Field(default_factory=list)
    injuries: List[str] = Field(default_factory=list)
    equipment: List[str] = Field(default_factory=list)


class ChatRequest(CamelModel):
    message: str = Field(..., min_length=1)


class ChatResponse(CamelModel):
    reply: str
    fallback: bool = False


class PlanRequest(CamelModel):
    goal: str = Field(..., min_length=1)
    level: str = "Beginner"
    time_available: str = "30 minutes"


class FormCheckRequest(CamelModel):
    exercise: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)


class NutritionRequest(CamelModel):
    goal: str = Field(..., min_length=1)
    restrictions: str = ""


class TextResponse(CamelModel):
    text: str
