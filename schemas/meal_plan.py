"""Meal plan collection schema."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field, field_validator

from .base import CamelModel


def _to_text(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class IngredientItem(CamelModel):
    """A single ingredient and its free-text quantity (e.g. '200g', '1 cup')."""
    name: str = Field(..., min_length=1, description="Ingredient name")
    quantity: str = Field(..., description="Amount with unit, as generated")

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, value: Any) -> Any:
        return _to_text(value)


class MealIngredients(CamelModel):
    """Ordered ingredient list for one meal."""
    items: List[IngredientItem] = Field(default_factory=list)


class WaterIntakeEntry(CamelModel):
    time: str
    amount: str

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, value: Any) -> Any:
        return _to_text(value)


class WaterIntakeSchedule(CamelModel):
    """Daily water target and when to drink it."""
    total_liters: float = Field(..., ge=0, description="Total daily water in liters")
    schedule: List[WaterIntakeEntry] = Field(default_factory=list)


class MealPlanContent(CamelModel):
    """Generated meal plan content, independent of storage identity."""
    breakfast: MealIngredients
    lunch: MealIngredients
    dinner: MealIngredients
    snacks: Optional[MealIngredients] = None
    foods_to_avoid: List[str] = Field(default_factory=list)
    water_intake: WaterIntakeSchedule

    @field_validator("breakfast", "lunch", "dinner")
    @classmethod
    def require_items(cls, value: MealIngredients) -> MealIngredients:
        if not value.items:
            raise ValueError("meal must list at least one ingredient")
        return value

    @field_validator("foods_to_avoid", mode="before")
    @classmethod
    def default_foods_to_avoid(cls, value: Any) -> Any:
        return [] if value is None else value

    def meals(self) -> List[MealIngredients]:
        """All meals present in the plan, snacks included when set."""
        meals = [self.breakfast, self.lunch, self.dinner]
        if self.snacks is not None:
            meals.append(self.snacks)
        return meals


class MealPlan(MealPlanContent):
    """Stored meal plan; one live document per user."""
    id: str = Field(..., description="Meal plan identifier")
    user_id: str = Field(..., description="Owning profile identifier")
    created_at: datetime = Field(..., description="Creation time of the first generation")
