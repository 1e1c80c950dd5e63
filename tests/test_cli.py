"""Tests for the fitcoach command line."""

import asyncio

import pytest

from fitcoach import cli
from fitcoach.storage.base import StorageKeys


@pytest.fixture
def cli_store(store, monkeypatch):
    """Point the CLI at the in-memory test store."""
    monkeypatch.setattr(cli, "create_store", lambda: store)
    return store


def test_no_command_prints_help(capsys):
    assert cli.main([]) == 1
    assert "Available commands" in capsys.readouterr().out


def test_complete_records_workout(cli_store):
    assert cli.main(["complete", "Morning HIIT", "--duration", "25:30", "--calories", "280"]) == 0

    stats = asyncio.run(cli_store.get(StorageKeys.USER_STATS))
    assert stats["totalWorkouts"] == 1
    assert stats["totalCalories"] == 280
    assert stats["totalMinutes"] == 25

    history = asyncio.run(cli_store.get(StorageKeys.WORKOUT_HISTORY))
    assert history[0]["videoId"] == "morning-hiit"


def test_negative_minutes_reported(cli_store):
    assert cli.main(["complete", "Broken", "--minutes", "-3"]) == 1


@pytest.mark.parametrize("command", ["stats", "history", "weekly", "challenge", "achievements"])
def test_read_commands_succeed(cli_store, command):
    assert cli.main([command]) == 0


def test_reset_skips_prompt_with_yes(cli_store):
    cli.main(["complete", "Morning HIIT", "--duration", "20:00"])

    assert cli.main(["reset", "--yes", "--achievements"]) == 0

    stats = asyncio.run(cli_store.get(StorageKeys.USER_STATS))
    assert stats["totalWorkouts"] == 0
    achievements = asyncio.run(cli_store.get(StorageKeys.ACHIEVEMENTS))
    assert not any(a["unlocked"] for a in achievements)
