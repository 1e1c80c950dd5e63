"""AI coach routes."""

from fastapi import APIRouter, Depends

from ..deps import get_coach
from ...llm.coach import CoachClient
from ...models.coach import (
    ChatRequest,
    ChatResponse,
    FormCheckRequest,
    NutritionRequest,
    PlanRequest,
    TextResponse,
    UserProfile,
    WorkoutPlan,
)


router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, coach: CoachClient = Depends(get_coach)):
    """
    Send a message to the coach.

    ``fallback`` is true when the reply is canned because the LLM was
    unavailable.
    """
    return await coach.send_message(request.message)


@router.post("/plan", response_model=WorkoutPlan)
async def generate_plan(request: PlanRequest, coach: CoachClient = Depends(get_coach)):
    """Generate a workout plan for a goal, level and time budget."""
    return await coach.generate_workout_plan(
        request.goal, request.level, request.time_available
    )


@router.post("/form", response_model=TextResponse)
async def analyze_form(request: FormCheckRequest, coach: CoachClient = Depends(get_coach)):
    return TextResponse(text=await coach.analyze_form(request.exercise, request.description))


@router.post("/nutrition", response_model=TextResponse)
async def nutrition_advice(request: NutritionRequest, coach: CoachClient = Depends(get_coach)):
    return TextResponse(text=await coach.nutrition_advice(request.goal, request.restrictions))


@router.get("/motivation", response_model=TextResponse)
async def motivation(context: str = "just finished a workout", coach: CoachClient = Depends(get_coach)):
    return TextResponse(text=await coach.motivational_message(context))


@router.get("/profile", response_model=UserProfile)
async def get_profile(coach: CoachClient = Depends(get_coach)):
    return coach.profile


@router.put("/profile", response_model=UserProfile)
async def update_profile(profile: UserProfile, coach: CoachClient = Depends(get_coach)):
    """Merge the fields that were sent into the coach's profile."""
    return coach.update_profile(**profile.model_dump(exclude_unset=True))


@router.delete("/history", status_code=204)
async def clear_history(coach: CoachClient = Depends(get_coach)):
    coach.clear_history()
