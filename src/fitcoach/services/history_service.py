"""
Workout history log.

Newest-first list of completed workouts, capped at HISTORY_LIMIT entries.
Feeds the weekly/monthly counters on UserStats and the weekly progress
chart.
"""

from datetime import datetime, timedelta
from typing import Any, List

from .base import BaseService
from ..models.progress import DayProgress, WorkoutEntry, WorkoutHistory
from ..storage.base import StorageKeys
from ..utils.dates import WEEKDAY_NAMES, weekday_name


HISTORY_LIMIT = 100


def parse_duration_to_minutes(duration: str) -> int:
    """
    Whole minutes in a display duration.

    "M:SS" gives M, "H:MM:SS" gives 60*H + MM; seconds are dropped.
    Anything else, including non-numeric parts, gives 0.

    Examples:
        >>> parse_duration_to_minutes("25:30")
        25
        >>> parse_duration_to_minutes("1:05:00")
        65
    """
    try:
        parts = [int(part) for part in duration.strip().split(":")]
    except (AttributeError, ValueError):
        return 0
    if any(part < 0 for part in parts):
        return 0
    if len(parts) == 2:
        return parts[0]
    if len(parts) == 3:
        return parts[0] * 60 + parts[1]
    return 0


def _parse_history(raw: Any) -> List[WorkoutHistory]:
    if not isinstance(raw, list):
        raise ValueError("workout history is not a list")
    return [WorkoutHistory.model_validate(item) for item in raw]


class WorkoutHistoryLog(BaseService):
    """Append-only, capped log of completed workouts."""

    async def get_all(self) -> List[WorkoutHistory]:
        """Return the full log, newest first."""
        return await self._read_or_default(
            StorageKeys.WORKOUT_HISTORY, _parse_history, list
        )

    async def append(self, entry: WorkoutEntry) -> WorkoutHistory:
        """
        Add a completed workout to the front of the log.

        Assigns the id, parsed minutes and completion time, then drops
        anything beyond the newest HISTORY_LIMIT entries.
        """
        history = await self.get_all()
        now = self.now()

        workout_id = str(int(now.timestamp() * 1000))
        existing_ids = {item.id for item in history}
        while workout_id in existing_ids:
            workout_id = str(int(workout_id) + 1)

        record = WorkoutHistory(
            id=workout_id,
            video_id=entry.video_id,
            title=entry.title,
            duration=entry.duration,
            minutes=parse_duration_to_minutes(entry.duration),
            calories=entry.calories,
            category=entry.category,
            difficulty=entry.difficulty,
            completed_at=now,
        )

        history.insert(0, record)
        del history[HISTORY_LIMIT:]

        await self._write(
            StorageKeys.WORKOUT_HISTORY,
            [item.to_storage() for item in history],
        )
        self.logger.info(f"Logged workout '{record.title}' ({record.minutes} min, {record.calories} kcal)")
        return record

    async def count_since(self, cutoff: datetime) -> int:
        """Number of logged workouts completed at or after cutoff."""
        history = await self.get_all()
        return sum(1 for item in history if item.completed_at >= cutoff)

    async def weekly_progress(self) -> List[DayProgress]:
        """
        Workouts, calories and minutes per weekday over the trailing 7 days.

        Always returns seven buckets ordered Sun..Sat.
        """
        history = await self.get_all()
        week_ago = self.now() - timedelta(days=7)

        buckets = {day: DayProgress(day=day) for day in WEEKDAY_NAMES}
        for item in history:
            if item.completed_at < week_ago:
                continue
            bucket = buckets[weekday_name(item.completed_at)]
            bucket.workouts += 1
            bucket.calories += item.calories
            bucket.minutes += item.minutes

        return [buckets[day] for day in WEEKDAY_NAMES]
