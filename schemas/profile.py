"""Profile collection schema."""

from typing import Any, List, Optional

from pydantic import AliasChoices, Field, field_validator

from .base import CamelModel
from .enums import (
    ActivityLevel,
    DoshaType,
    FoodPreference,
    Gender,
    GoalSpeed,
    PhysicalGoal,
    WorkingHoursPreference,
)


def _split_values(value: Any) -> List[Any]:
    """Accept a list or a comma-separated string; trim and drop blanks."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple, set)):
        raise ValueError("must be a list or a comma-separated string")
    values = []
    for item in value:
        if isinstance(item, str):
            item = item.strip()
            if not item:
                continue
        values.append(item)
    return values


def _dedupe(values: List[Any]) -> List[Any]:
    seen = set()
    unique = []
    for item in values:
        key = getattr(item, "value", item)
        key = key.lower() if isinstance(key, str) else key
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


class ProfileCreate(CamelModel):
    """Holistic health intake submitted through onboarding."""

    # Personal information
    name: str = Field(..., min_length=2, description="User name")
    age: int = Field(..., ge=10, le=120, description="Age in years")
    gender: Gender = Field(..., description="male, female or other")
    height: int = Field(..., ge=50, le=300, description="Height in cm")
    weight: int = Field(..., ge=20, le=500, description="Weight in kg")
    region: str = Field(..., min_length=2, description="Region, used for locally available food")
    occupation: str = Field(..., min_length=2, description="Occupation")

    # Health information
    medical_conditions: List[str] = Field(default_factory=list)
    allergies: List[str] = Field(default_factory=list)
    physical_activity_level: ActivityLevel = Field(
        ...,
        validation_alias=AliasChoices(
            "physicalActivityLevel", "activityLevel", "physical_activity_level"
        ),
        serialization_alias="physicalActivityLevel",
    )

    # Spiritual / Ayurvedic information
    birth_place: Optional[str] = None
    birth_date: Optional[str] = None
    birth_time: Optional[str] = None
    dosha_type: Optional[DoshaType] = None

    # Preferences
    food_preference: FoodPreference
    weekly_budget: float = Field(..., ge=0, description="Weekly food budget in local currency")
    working_hours_preference: WorkingHoursPreference

    # Goals
    physical_goals: List[PhysicalGoal] = Field(default_factory=list)
    mental_goals: bool = False
    spiritual_goals: bool = False
    goal_speed: GoalSpeed

    custom_preferences: Optional[str] = None

    @field_validator("name", "region", "occupation", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator(
        "birth_place", "birth_date", "birth_time", "dosha_type", "custom_preferences",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value.strip() if isinstance(value, str) else value

    @field_validator("medical_conditions", "allergies", "physical_goals", mode="before")
    @classmethod
    def split_values(cls, value: Any) -> List[Any]:
        return _split_values(value)

    @field_validator("medical_conditions", "allergies", "physical_goals")
    @classmethod
    def unique_values(cls, value: List[Any]) -> List[Any]:
        return _dedupe(value)


class Profile(ProfileCreate):
    """Stored profile with its assigned identity."""
    id: str = Field(..., description="Unique profile identifier")
