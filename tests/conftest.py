"""Shared fixtures: a controllable clock, stores and a wired engine."""

from datetime import datetime, timedelta
from typing import Any, Optional, Sequence

import pytest

from fitcoach.exceptions import StorageReadError, StorageWriteError
from fitcoach.models.progress import ChallengeType, DailyChallenge
from fitcoach.services.progression import ProgressionEngine
from fitcoach.storage.base import StorageKeys
from fitcoach.storage.memory import InMemoryStore


# Monday, 19 October 2026
START = datetime(2026, 10, 19, 9, 0, 0)


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime = START) -> None:
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: Any) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


class PickTemplate:
    """Random source that always picks the template of one challenge type."""

    def __init__(self, challenge_type: ChallengeType) -> None:
        self.challenge_type = challenge_type

    def choice(self, seq: Sequence[Any]) -> Any:
        for item in seq:
            if isinstance(item, dict) and item.get("type") is self.challenge_type:
                return item
        return seq[0]

    def shuffle(self, seq: list) -> None:
        pass


class FailingStore:
    """Store whose reads and/or writes always fail."""

    def __init__(self, fail_reads: bool = True, fail_writes: bool = True) -> None:
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.inner = InMemoryStore()

    async def get(self, key: str) -> Optional[Any]:
        if self.fail_reads:
            raise StorageReadError(key, "disk unavailable")
        return await self.inner.get(key)

    async def set(self, key: str, value: Any) -> None:
        if self.fail_writes:
            raise StorageWriteError(key, "disk full")
        await self.inner.set(key, value)


async def seed_challenge(
    store: InMemoryStore,
    challenge_type: ChallengeType,
    target: int,
    day: str = "2026-10-19",
    current: int = 0,
) -> DailyChallenge:
    """Store a challenge for a given day."""
    challenge = DailyChallenge(
        id=f"{day}-{challenge_type.value}",
        title="Seeded",
        description="Seeded challenge",
        type=challenge_type,
        target=target,
        current=current,
        reward="100 XP",
        date=day,
    )
    await store.set(StorageKeys.DAILY_CHALLENGE, challenge.to_storage())
    return challenge


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def engine(store, clock):
    """Engine whose daily challenge is always the streak challenge."""
    return ProgressionEngine(store, clock=clock, rng=PickTemplate(ChallengeType.STREAK))


@pytest.fixture
def make_engine(store, clock):
    """Factory for engines pinned to one daily challenge type."""

    def _make(challenge_type=ChallengeType.STREAK, backing_store=None):
        return ProgressionEngine(
            backing_store or store, clock=clock, rng=PickTemplate(challenge_type)
        )

    return _make


@pytest.fixture
def seed():
    """Helper storing a daily challenge."""
    return seed_challenge


@pytest.fixture
def failing_store():
    """Store where every read and write fails."""
    return FailingStore()


@pytest.fixture
def write_failing_store():
    """Store that can be read but rejects every write."""
    return FailingStore(fail_reads=False)
