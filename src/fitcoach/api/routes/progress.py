"""Progression API routes: stats, workouts, history, daily challenge and achievements."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import Field

from ..deps import get_engine
from ...models.progress import (
    Achievement,
    CamelModel,
    DailyChallenge,
    DayProgress,
    LevelInfo,
    UserStats,
    WorkoutCompletion,
    WorkoutHistory,
    WorkoutResult,
)
from ...services.progression import ProgressionEngine
from ...services.stats_service import level_progress


router = APIRouter()


# =============================================================================
# Request/Response Models
# =============================================================================


class StatsResponse(CamelModel):
    """User stats with position inside the current level."""

    stats: UserStats
    level_progress: LevelInfo


class ResetRequest(CamelModel):
    include_achievements: bool = Field(
        default=False, description="Also lock every achievement again"
    )


class AchievementsListResponse(CamelModel):
    """Response model for listing all achievements."""

    achievements: List[Achievement] = Field(
        ..., description="All achievements with unlock status"
    )
    total: int = Field(..., description="Total number of achievements")
    unlocked: int = Field(..., description="Number of unlocked achievements")


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/stats", response_model=StatsResponse)
async def get_stats(engine: ProgressionEngine = Depends(get_engine)):
    """Get the user's stats and level progress."""
    stats = await engine.stats.get_stats()
    return StatsResponse(stats=stats, level_progress=level_progress(stats.experience))


@router.post("/stats/reset", response_model=UserStats)
async def reset_stats(
    request: Optional[ResetRequest] = None,
    engine: ProgressionEngine = Depends(get_engine),
):
    """
    Reset stats to zero defaults.

    Achievements stay unlocked unless includeAchievements is set.
    """
    include = request.include_achievements if request else False
    return await engine.reset(include_achievements=include)


@router.post("/workouts", response_model=WorkoutResult, status_code=201)
async def complete_workout(
    completion: WorkoutCompletion,
    engine: ProgressionEngine = Depends(get_engine),
):
    """
    Record a completed workout.

    Updates stats, the daily challenge and achievements, and appends the
    workout to the history.
    """
    return await engine.complete_workout(completion)


@router.get("/history", response_model=List[WorkoutHistory])
async def get_history(
    limit: Optional[int] = Query(None, ge=1, le=100),
    engine: ProgressionEngine = Depends(get_engine),
):
    """Get completed workouts, newest first."""
    history = await engine.history.get_all()
    return history[:limit] if limit else history


@router.get("/weekly", response_model=List[DayProgress])
async def get_weekly_progress(engine: ProgressionEngine = Depends(get_engine)):
    """Get per-weekday totals for the trailing seven days, Sunday first."""
    return await engine.history.weekly_progress()


@router.get("/challenge", response_model=DailyChallenge)
async def get_daily_challenge(engine: ProgressionEngine = Depends(get_engine)):
    """Get today's challenge."""
    return await engine.challenges.get_daily_challenge()


@router.get("/achievements", response_model=AchievementsListResponse)
async def get_achievements(engine: ProgressionEngine = Depends(get_engine)):
    """Get all achievements with their unlock status."""
    achievements = await engine.achievements.get_achievements()
    return AchievementsListResponse(
        achievements=achievements,
        total=len(achievements),
        unlocked=sum(1 for a in achievements if a.unlocked),
    )


@router.get("/achievements/recent", response_model=List[Achievement])
async def get_recent_achievements(
    limit: int = Query(3, ge=1, le=20),
    engine: ProgressionEngine = Depends(get_engine),
):
    """Get the most recently unlocked achievements."""
    return await engine.achievements.recent_unlocked(limit=limit)
