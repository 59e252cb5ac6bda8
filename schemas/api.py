"""Request/response schemas for the REST API."""

from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import CamelModel
from .meal_plan import MealPlan
from .timetable import Timetable


class GeneratePlanRequest(CamelModel):
    """Request body for plan generation."""
    user_id: Optional[str] = Field(None, description="Profile identifier to generate for")


class GeneratedPlan(CamelModel):
    """The meal plan and timetable produced by one generation cycle."""
    meal_plan: MealPlan
    timetable: Timetable


class ErrorResponse(CamelModel):
    error: str
    details: Optional[List[Dict[str, Any]]] = None
