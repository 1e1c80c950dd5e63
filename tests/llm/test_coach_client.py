"""Tests for CoachClient and its fallbacks."""

import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from fitcoach.exceptions import LLMResponseInvalidError, LLMServiceUnavailableError
from fitcoach.llm.coach import (
    MAX_HISTORY_LINES,
    CoachClient,
    estimate_calories,
    fallback_plan,
)
from fitcoach.llm.prompts import FALLBACK_CHAT_REPLIES, FALLBACK_MOTIVATION


@pytest.fixture
def llm():
    client = MagicMock()
    client.completion = AsyncMock(return_value="Great question!")
    client.completion_json = AsyncMock()
    return client


@pytest.fixture
def coach(llm):
    return CoachClient(llm=llm, rng=random.Random(7))


@pytest.fixture
def offline_coach():
    return CoachClient(llm=None, rng=random.Random(7))


PLAN = {
    "name": "Lean Legs",
    "duration": "30 minutes",
    "difficulty": "Intermediate",
    "calories": 0,
    "focus": "Legs",
    "aiInsights": "Progressive overload",
    "exercises": [
        {"name": "Lunges", "sets": 3, "reps": "12", "restTime": "45 seconds"},
    ],
    "warmup": ["Leg swings"],
    "cooldown": ["Quad stretch"],
    "tips": ["Breathe"],
}


class TestEstimateCalories:
    """Tests for plan calorie estimates."""

    def test_per_level_rates(self):
        assert estimate_calories("30 minutes", "Beginner") == 210
        assert estimate_calories("30 minutes", "Intermediate") == 270
        assert estimate_calories("30 minutes", "Advanced") == 360

    def test_missing_number_defaults_to_thirty(self):
        assert estimate_calories("about an hour", "Beginner") == 210

    def test_fallback_plan_scales_with_level(self):
        beginner = fallback_plan("Strength", "Beginner", "20 minutes")
        advanced = fallback_plan("Strength", "Advanced", "20 minutes")

        assert beginner.name == "Strength Starter Session"
        assert beginner.calories == 140
        assert beginner.exercises[0].sets == 2
        assert advanced.exercises[0].sets == 3


class TestOfflineCoach:
    """Tests for the fallback path with no LLM configured."""

    def test_not_available(self, offline_coach):
        assert offline_coach.available is False

    @pytest.mark.asyncio
    async def test_chat_uses_canned_reply(self, offline_coach):
        response = await offline_coach.send_message("How do I start?")

        assert response.fallback is True
        assert response.reply in FALLBACK_CHAT_REPLIES
        assert offline_coach.history == []

    @pytest.mark.asyncio
    async def test_plan_uses_fallback(self, offline_coach):
        plan = await offline_coach.generate_workout_plan("Fat loss", "Intermediate", "45 minutes")

        assert plan.focus == "Fat loss"
        assert plan.calories == 45 * 9
        assert [e.name for e in plan.exercises] == ["Push-ups", "Bodyweight Squats", "Plank Hold"]

    @pytest.mark.asyncio
    async def test_single_shot_fallbacks(self, offline_coach):
        assert "squat" in (await offline_coach.analyze_form("squat", "knees cave in"))
        assert await offline_coach.motivational_message("tired") == FALLBACK_MOTIVATION
        assert "muscle gain" in (await offline_coach.nutrition_advice("muscle gain"))


class TestConnectedCoach:
    """Tests with a mocked LLM client."""

    @pytest.mark.asyncio
    async def test_chat_records_history(self, coach, llm):
        response = await coach.send_message("Best warmup?")

        assert response.reply == "Great question!"
        assert response.fallback is False
        assert coach.history == ["User: Best warmup?", "FitBuddy: Great question!"]

    @pytest.mark.asyncio
    async def test_chat_includes_profile_and_history(self, coach, llm):
        coach.update_profile(fitness_goal="Run a 10K")
        await coach.send_message("First")

        await coach.send_message("Second")

        prompt = llm.completion.call_args.args[0][1]["content"]
        assert "Run a 10K" in prompt
        assert "User: First" in prompt
        assert prompt.endswith("Current message: Second")

    @pytest.mark.asyncio
    async def test_history_capped(self, coach):
        for i in range(15):
            await coach.send_message(f"message {i}")

        assert len(coach.history) == MAX_HISTORY_LINES
        assert coach.history[0] == "User: message 5"

    @pytest.mark.asyncio
    async def test_chat_error_falls_back(self, coach, llm):
        llm.completion.side_effect = LLMServiceUnavailableError(message="down")

        response = await coach.send_message("Hello?")

        assert response.fallback is True
        assert coach.history == []

    @pytest.mark.asyncio
    async def test_plan_from_llm_fills_calories(self, coach, llm):
        llm.completion_json.return_value = PLAN

        plan = await coach.generate_workout_plan("Legs", "Intermediate", "30 minutes")

        assert plan.name == "Lean Legs"
        assert plan.exercises[0].rest_time == "45 seconds"
        assert plan.calories == 270

    @pytest.mark.asyncio
    async def test_plan_invalid_shape_falls_back(self, coach, llm):
        llm.completion_json.return_value = {"name": "Missing everything"}

        plan = await coach.generate_workout_plan("Legs")

        assert plan.name == "Legs Starter Session"

    @pytest.mark.asyncio
    async def test_plan_invalid_json_falls_back(self, coach, llm):
        llm.completion_json.side_effect = LLMResponseInvalidError(message="bad json")

        plan = await coach.generate_workout_plan("Core")

        assert plan.name == "Core Starter Session"

    def test_update_profile_merges(self, coach):
        coach.update_profile(fitness_goal="Strength")
        profile = coach.update_profile(equipment=["dumbbells"])

        assert profile.fitness_goal == "Strength"
        assert profile.equipment == ["dumbbells"]

    @pytest.mark.asyncio
    async def test_clear_history(self, coach):
        await coach.send_message("hi")

        coach.clear_history()

        assert coach.history == []
