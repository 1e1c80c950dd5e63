"""
Key-value store protocol and read outcomes.

Every progression store persists one JSON blob per key. Adapters only need
to provide async ``get``/``set``; values are plain JSON-compatible Python
objects (dicts, lists, numbers, strings).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, Protocol, TypeVar, runtime_checkable


T = TypeVar("T")


class StorageKeys:
    """Keys of the persisted blobs."""

    USER_STATS = "userStats"
    PERSONAL_RECORDS = "personalRecords"
    FAVORITE_VIDEOS = "favoriteVideos"
    WORKOUT_HISTORY = "workoutHistory"
    DAILY_CHALLENGE = "dailyChallenge"
    ACHIEVEMENTS = "achievements"
    APP_SETTINGS = "appSettings"

    ALL = (
        USER_STATS,
        PERSONAL_RECORDS,
        FAVORITE_VIDEOS,
        WORKOUT_HISTORY,
        DAILY_CHALLENGE,
        ACHIEVEMENTS,
        APP_SETTINGS,
    )


@runtime_checkable
class KeyValueStore(Protocol):
    """
    Protocol for async key-value stores.

    ``get`` returns None when the key is absent. Adapters raise
    StorageReadError / StorageWriteError on failure.
    """

    async def get(self, key: str) -> Optional[Any]:
        """Get the decoded value stored under key."""
        ...

    async def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value under key."""
        ...


class ReadStatus(str, Enum):
    OK = "ok"
    ABSENT = "absent"
    ERROR = "error"


@dataclass
class ReadResult(Generic[T]):
    """
    Outcome of a store read.

    Keeps "no data" and "storage failure" apart so callers decide
    explicitly how each collapses into a default.
    """

    status: ReadStatus
    value: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def ok(cls, value: T) -> "ReadResult[T]":
        return cls(status=ReadStatus.OK, value=value)

    @classmethod
    def absent(cls) -> "ReadResult[T]":
        return cls(status=ReadStatus.ABSENT)

    @classmethod
    def failed(cls, error: Exception) -> "ReadResult[T]":
        return cls(status=ReadStatus.ERROR, error=error)

    @property
    def is_ok(self) -> bool:
        return self.status is ReadStatus.OK

    @property
    def is_absent(self) -> bool:
        return self.status is ReadStatus.ABSENT

    @property
    def is_error(self) -> bool:
        return self.status is ReadStatus.ERROR

    def value_or(self, default: T) -> T:
        """Collapse absent and error outcomes into default."""
        return self.value if self.is_ok else default
