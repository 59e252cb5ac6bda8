"""REST API routes for profiles, meal plans, timetables and plan generation."""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from schemas.api import ErrorResponse, GeneratePlanRequest, GeneratedPlan
from schemas.meal_plan import MealPlan
from schemas.profile import Profile
from schemas.timetable import Timetable
from services.plan_orchestrator import PlanOrchestrator
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api", tags=["api"])

NOT_FOUND = {404: {"model": ErrorResponse}}


def get_orchestrator(request: Request) -> PlanOrchestrator:
    """Orchestrator built during application startup."""
    return request.app.state.orchestrator


@router.post(
    "/profile",
    response_model=Profile,
    responses={400: {"model": ErrorResponse}},
)
async def create_profile(
    payload: Dict[str, Any] = Body(..., description="Onboarding profile data"),
    orchestrator: PlanOrchestrator = Depends(get_orchestrator),
):
    """Create a user profile from onboarding data."""
    profile = await orchestrator.create_profile(payload)
    logger.info(f"Created profile: {profile.id}")
    return profile


@router.get("/profile/{user_id}", response_model=Profile, responses=NOT_FOUND)
async def get_profile(user_id: str, orchestrator: PlanOrchestrator = Depends(get_orchestrator)):
    """Get a user profile."""
    return await orchestrator.get_profile(user_id)


@router.get("/meal-plan/{user_id}", response_model=MealPlan, responses=NOT_FOUND)
async def get_meal_plan(user_id: str, orchestrator: PlanOrchestrator = Depends(get_orchestrator)):
    """Get the current meal plan for a user."""
    return await orchestrator.get_meal_plan(user_id)


@router.get("/timetable/{user_id}", response_model=Timetable, responses=NOT_FOUND)
async def get_timetable(user_id: str, orchestrator: PlanOrchestrator = Depends(get_orchestrator)):
    """Get the current daily timetable for a user."""
    return await orchestrator.get_timetable(user_id)


@router.get("/plan/{user_id}", response_model=GeneratedPlan, responses=NOT_FOUND)
async def get_plan(user_id: str, orchestrator: PlanOrchestrator = Depends(get_orchestrator)):
    """Get the current meal plan and timetable together."""
    return await orchestrator.get_plan(user_id)


@router.post(
    "/generate-plan",
    response_model=GeneratedPlan,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def generate_plan(
    request: GeneratePlanRequest,
    orchestrator: PlanOrchestrator = Depends(get_orchestrator),
):
    """Generate a personalized meal plan and timetable, replacing any previous ones."""
    if not request.user_id:
        return JSONResponse(status_code=400, content={"error": "User ID is required"})

    logger.info(f"Generating plan for user {request.user_id}")
    return await orchestrator.generate_plan(request.user_id)
