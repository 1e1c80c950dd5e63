"""
AI fitness coach.

Conversational coaching, workout plan generation, form analysis,
motivation and nutrition advice over the OpenAI API. Every call degrades
to a canned reply when the LLM is unconfigured or failing.
"""

import json
import logging
import random
import re
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError

from .client import LLMClient
from .prompts import (
    CHAT_CONTEXT,
    COACH_SYSTEM,
    FALLBACK_CHAT_REPLIES,
    FALLBACK_FORM_ANALYSIS,
    FALLBACK_MOTIVATION,
    FALLBACK_NUTRITION,
    FALLBACK_PLAN_INSIGHTS,
    FORM_ANALYSIS_USER,
    MOTIVATION_USER,
    NUTRITION_USER,
    WORKOUT_PLAN_SYSTEM,
    WORKOUT_PLAN_USER,
)
from ..exceptions import LLMError
from ..models.coach import ChatResponse, Exercise, UserProfile, WorkoutPlan


logger = logging.getLogger(__name__)

# Conversation lines kept (user + coach, so 10 exchanges)
MAX_HISTORY_LINES = 20
# Lines of recent conversation included with each message
CONTEXT_LINES = 6

_CALORIES_PER_MINUTE = {"Beginner": 7, "Intermediate": 9}
_ADVANCED_CALORIES_PER_MINUTE = 12


def estimate_calories(time_available: str, level: str) -> int:
    """
    Calories for a plan from the first number in its time budget.

    Examples:
        >>> estimate_calories("30 minutes", "Beginner")
        210
        >>> estimate_calories("about an hour", "Advanced")
        360
    """
    match = re.search(r"\d+", time_available or "")
    minutes = int(match.group()) if match else 30
    return minutes * _CALORIES_PER_MINUTE.get(level, _ADVANCED_CALORIES_PER_MINUTE)


def fallback_plan(goal: str, level: str, time_available: str) -> WorkoutPlan:
    """Canned bodyweight plan scaled to the fitness level."""
    beginner = level == "Beginner"
    return WorkoutPlan(
        name=f"{goal} Starter Session",
        duration=time_available,
        difficulty=level,
        calories=estimate_calories(time_available, level),
        focus=goal,
        ai_insights=FALLBACK_PLAN_INSIGHTS,
        exercises=[
            Exercise(
                name="Push-ups",
                sets=2 if beginner else 3,
                reps="6-10" if beginner else "10-15",
                rest_time="60 seconds",
                form_tips=[
                    "Keep a straight line from head to heels",
                    "Lower until your chest is just above the floor",
                ],
                modifications=["Knee push-ups", "Incline push-ups", "Archer push-ups"],
                target_muscles=["Chest", "Shoulders", "Triceps", "Core"],
            ),
            Exercise(
                name="Bodyweight Squats",
                sets=2 if beginner else 3,
                reps="10-15" if beginner else "15-20",
                rest_time="45 seconds",
                form_tips=[
                    "Push your hips back and keep your chest up",
                    "Track your knees over your toes",
                ],
                modifications=["Chair-assisted squats", "Jump squats", "Pistol squats"],
                target_muscles=["Quadriceps", "Glutes", "Hamstrings", "Core"],
            ),
            Exercise(
                name="Plank Hold",
                sets=3,
                reps="20-30 seconds" if beginner else "30-60 seconds",
                rest_time="60 seconds",
                form_tips=["Keep your hips level", "Squeeze your glutes and brace your core"],
                modifications=["Knee plank", "Side plank"],
                target_muscles=["Core", "Shoulders", "Back"],
            ),
        ],
        warmup=["Arm circles", "Leg swings", "Torso twists", "Light jogging in place"],
        cooldown=["Static stretching", "Deep breathing", "Child's pose"],
        tips=[
            "Quality over quantity: stop a set when your form breaks down",
            "Rest longer if you need to",
            "Stay hydrated",
        ],
    )


class CoachClient:
    """
    Stateful coaching session.

    Holds the user profile and the rolling conversation. Pass ``llm=None``
    (or leave the API key unset) to run on fallbacks only.
    """

    def __init__(
        self,
        llm: Optional[LLMClient] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._llm = llm
        self._rng = rng or random.Random()
        self.profile = UserProfile()
        self.history: List[str] = []

    @classmethod
    def from_settings(cls) -> "CoachClient":
        """Build a coach using the configured OpenAI key, if any."""
        try:
            llm = LLMClient()
        except LLMError as e:
            logger.info(f"AI coach running on fallbacks: {e.message}")
            llm = None
        return cls(llm=llm)

    @property
    def available(self) -> bool:
        return self._llm is not None

    # -------------------------------------------------------------------------
    # Profile and conversation state
    # -------------------------------------------------------------------------

    def update_profile(self, **changes: Any) -> UserProfile:
        """Merge changes into the profile."""
        merged = {**self.profile.model_dump(), **changes}
        self.profile = UserProfile.model_validate(merged)
        return self.profile

    def clear_history(self) -> None:
        self.history = []

    def _profile_json(self) -> str:
        return json.dumps(self.profile.model_dump(by_alias=True, exclude_defaults=True))

    def _with_context(self, message: str) -> str:
        profile = self.profile.model_dump(exclude_defaults=True)
        profile_block = f"User profile: {self._profile_json()}\n\n" if profile else ""
        history_block = ""
        if self.history:
            recent = "\n".join(self.history[-CONTEXT_LINES:])
            history_block = f"Recent conversation:\n{recent}\n\n"
        return CHAT_CONTEXT.format(
            profile_block=profile_block, history_block=history_block, message=message
        )

    # -------------------------------------------------------------------------
    # Coaching calls
    # -------------------------------------------------------------------------

    async def send_message(self, message: str) -> ChatResponse:
        """
        Reply to a chat message.

        Successful exchanges are appended to the conversation, which keeps
        only the last MAX_HISTORY_LINES lines.
        """
        if self._llm is None:
            return ChatResponse(reply=self._rng.choice(FALLBACK_CHAT_REPLIES), fallback=True)

        try:
            reply = await self._llm.completion([
                {"role": "system", "content": COACH_SYSTEM},
                {"role": "user", "content": self._with_context(message)},
            ])
        except LLMError as e:
            logger.error(f"Coach chat failed: {e.message}")
            return ChatResponse(reply=self._rng.choice(FALLBACK_CHAT_REPLIES), fallback=True)

        self.history.append(f"User: {message}")
        self.history.append(f"FitBuddy: {reply}")
        del self.history[:-MAX_HISTORY_LINES]
        return ChatResponse(reply=reply)

    async def generate_workout_plan(
        self,
        goal: str,
        level: str = "Beginner",
        time_available: str = "30 minutes",
    ) -> WorkoutPlan:
        """
        Generate a structured workout plan.

        Falls back to a canned plan if the LLM is unavailable or returns
        something that does not validate as a WorkoutPlan.
        """
        if self._llm is None:
            logger.info("LLM not configured, using fallback workout plan")
            return fallback_plan(goal, level, time_available)

        prompt = WORKOUT_PLAN_USER.format(
            goal=goal,
            level=level,
            time_available=time_available,
            profile=self._profile_json(),
        )
        try:
            data = await self._llm.completion_json(WORKOUT_PLAN_SYSTEM, prompt)
            plan = WorkoutPlan.model_validate(data)
        except LLMError as e:
            logger.error(f"Workout plan generation failed: {e.message}")
            return fallback_plan(goal, level, time_available)
        except PydanticValidationError as e:
            logger.error(f"Workout plan failed validation: {e.error_count()} errors")
            return fallback_plan(goal, level, time_available)

        if not plan.calories:
            plan.calories = estimate_calories(time_available, level)
        return plan

    async def _single_shot(self, prompt: str, fallback: str, operation: str) -> str:
        if self._llm is None:
            return fallback
        try:
            return await self._llm.completion([
                {"role": "system", "content": COACH_SYSTEM},
                {"role": "user", "content": prompt},
            ])
        except LLMError as e:
            logger.error(f"{operation} failed: {e.message}")
            return fallback

    async def analyze_form(self, exercise: str, description: str) -> str:
        """Feedback on a user's description of their form."""
        return await self._single_shot(
            FORM_ANALYSIS_USER.format(exercise=exercise, description=description),
            FALLBACK_FORM_ANALYSIS.format(exercise=exercise),
            "Form analysis",
        )

    async def motivational_message(self, context: str) -> str:
        return await self._single_shot(
            MOTIVATION_USER.format(context=context),
            FALLBACK_MOTIVATION,
            "Motivational message",
        )

    async def nutrition_advice(self, goal: str, restrictions: str = "") -> str:
        restriction_text = f" (dietary restrictions: {restrictions})" if restrictions else ""
        return await self._single_shot(
            NUTRITION_USER.format(goal=goal, restrictions=restriction_text),
            FALLBACK_NUTRITION.format(goal=goal),
            "Nutrition advice",
        )
