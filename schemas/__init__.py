"""Schemas for profiles, plans and timetables."""

from schemas.enums import (
    ActivityLevel,
    DoshaType,
    FoodPreference,
    Gender,
    GoalSpeed,
    PhysicalGoal,
    WorkingHoursPreference,
)
from schemas.profile import Profile, ProfileCreate
from schemas.meal_plan import (
    IngredientItem,
    MealIngredients,
    MealPlan,
    MealPlanContent,
    WaterIntakeEntry,
    WaterIntakeSchedule,
)
from schemas.timetable import (
    MealTimings,
    SleepSchedule,
    TimeBlock,
    Timetable,
    TimetableContent,
    WorkBlock,
    WorkSchedule,
)
from schemas.api import ErrorResponse, GeneratePlanRequest, GeneratedPlan

__all__ = [
    "ActivityLevel",
    "DoshaType",
    "FoodPreference",
    "Gender",
    "GoalSpeed",
    "PhysicalGoal",
    "WorkingHoursPreference",
    "Profile",
    "ProfileCreate",
    "IngredientItem",
    "MealIngredients",
    "MealPlan",
    "MealPlanContent",
    "WaterIntakeEntry",
    "WaterIntakeSchedule",
    "MealTimings",
    "SleepSchedule",
    "TimeBlock",
    "Timetable",
    "TimetableContent",
    "WorkBlock",
    "WorkSchedule",
    "ErrorResponse",
    "GeneratePlanRequest",
    "GeneratedPlan",
]
