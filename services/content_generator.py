"""Meal plan and timetable generation through the language model."""

import asyncio
import re
from typing import Any, Dict, List, Optional, Set

from langchain_core.runnables import Runnable
from pydantic import ValidationError

from config.settings import settings
from prompts.meal_plan_prompt import MEAL_PLAN_AGENT_PROMPT
from prompts.timetable_prompt import TIMETABLE_AGENT_PROMPT
from schemas.meal_plan import MealPlanContent
from schemas.profile import Profile
from schemas.timetable import TimetableContent
from services.errors import GenerationError
from services.llm_factory import get_llm
from utils.helpers import extract_json, format_list, yes_no
from utils.logger import setup_logger

logger = setup_logger(__name__)

MEAL_PLAN = "meal_plan"
TIMETABLE = "timetable"


def _enum_value(value: Any, default: str) -> str:
    if value is None:
        return default
    return getattr(value, "value", value)


def _format_amount(amount: float) -> str:
    if float(amount).is_integer():
        return f"{amount:.0f}"
    return str(amount)


def build_meal_plan_variables(profile: Profile) -> Dict[str, Any]:
    """Prompt variables describing the profile for meal planning."""
    return {
        "name": profile.name,
        "age": profile.age,
        "gender": _enum_value(profile.gender, "Not specified"),
        "height": profile.height,
        "weight": profile.weight,
        "region": profile.region,
        "occupation": profile.occupation,
        "medical_conditions": format_list(profile.medical_conditions),
        "allergies": format_list(profile.allergies),
        "activity_level": _enum_value(profile.physical_activity_level, "Not specified"),
        "dosha_type": _enum_value(profile.dosha_type, "Not specified"),
        "birth_place": profile.birth_place or "Not specified",
        "birth_date": profile.birth_date or "Not specified",
        "birth_time": profile.birth_time or "",
        "food_preference": _enum_value(profile.food_preference, "Not specified"),
        "weekly_budget": _format_amount(profile.weekly_budget),
        "custom_preferences": profile.custom_preferences or "None",
        "physical_goals": format_list(profile.physical_goals),
        "mental_goals": yes_no(profile.mental_goals),
        "spiritual_goals": yes_no(profile.spiritual_goals),
        "goal_speed": _enum_value(profile.goal_speed, "Not specified"),
    }


def build_timetable_variables(profile: Profile) -> Dict[str, Any]:
    """Prompt variables describing the profile for daily scheduling."""
    if profile.physical_goals:
        exercise_instruction = "Include an exercise schedule supporting the physical goals"
    else:
        exercise_instruction = "No physical goals are set; the exercise schedule may be null"
    if profile.spiritual_goals:
        meditation_instruction = "Include a meditation/spiritual practice schedule"
    else:
        meditation_instruction = "No spiritual goals are set; the meditation schedule may be null"

    return {
        "name": profile.name,
        "age": profile.age,
        "gender": _enum_value(profile.gender, "Not specified"),
        "occupation": profile.occupation,
        "region": profile.region,
        "activity_level": _enum_value(profile.physical_activity_level, "Not specified"),
        "medical_conditions": format_list(profile.medical_conditions),
        "dosha_type": _enum_value(profile.dosha_type, "Balanced"),
        "birth_time": profile.birth_time or "Not specified",
        "working_hours_preference": _enum_value(profile.working_hours_preference, "flexible"),
        "custom_preferences": profile.custom_preferences or "None",
        "physical_goals": format_list(profile.physical_goals),
        "mental_goals": yes_no(profile.mental_goals),
        "spiritual_goals": yes_no(profile.spiritual_goals),
        "goal_speed": _enum_value(profile.goal_speed, "Not specified"),
        "exercise_instruction": exercise_instruction,
        "meditation_instruction": meditation_instruction,
    }


def _words(text: str) -> Set[str]:
    """Lowercase words with a plural 's' dropped, for allergen matching."""
    words = set()
    for word in re.findall(r"[a-z]+", text.lower()):
        if len(word) > 3 and word.endswith("s"):
            word = word[:-1]
        words.add(word)
    return words


def find_allergen_items(content: MealPlanContent, allergies: List[str]) -> List[str]:
    """Ingredient names in the plan that mention any of the allergens."""
    allergen_words = [_words(a) for a in allergies]
    allergen_words = [w for w in allergen_words if w]
    flagged = []
    for meal in content.meals():
        for item in meal.items:
            item_words = _words(item.name)
            if any(words <= item_words for words in allergen_words):
                flagged.append(item.name)
    return flagged


def _response_text(response: Any) -> str:
    content = getattr(response, "content", response)
    if isinstance(content, list):
        # Anthropic models return content blocks
        content = "".join(
            block.get("text", "") if isinstance(block, dict) else str(block)
            for block in content
        )
    if not isinstance(content, str):
        raise ValueError(f"Unexpected response type {type(content).__name__}")
    return content


class ContentGenerator:
    """Produces structured meal plans and timetables for a profile.

    The two operations share no state, so callers may run them concurrently.
    Every failure mode (provider error, timeout, malformed or incomplete JSON)
    is raised as a GenerationError.
    """

    def __init__(
        self,
        meal_plan_llm: Runnable,
        timetable_llm: Runnable,
        timeout_seconds: Optional[float] = None,
    ):
        self.meal_plan_chain = MEAL_PLAN_AGENT_PROMPT | meal_plan_llm
        self.timetable_chain = TIMETABLE_AGENT_PROMPT | timetable_llm
        self.timeout_seconds = timeout_seconds or None

    @classmethod
    def from_settings(cls) -> "ContentGenerator":
        return cls(
            meal_plan_llm=get_llm("meal_plan_agent"),
            timetable_llm=get_llm("timetable_agent"),
            timeout_seconds=settings.generation_timeout_seconds,
        )

    async def generate_meal_plan(self, profile: Profile) -> MealPlanContent:
        data = await self._invoke(MEAL_PLAN, self.meal_plan_chain, build_meal_plan_variables(profile))
        try:
            content = MealPlanContent.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Meal plan response for {profile.id} failed validation: {e}")
            raise GenerationError(MEAL_PLAN, f"response does not match the meal plan shape ({e.error_count()} errors)") from e

        flagged = find_allergen_items(content, profile.allergies)
        if flagged:
            logger.warning(f"Meal plan for {profile.id} contains allergens: {flagged}")
            raise GenerationError(MEAL_PLAN, f"plan includes allergen ingredients: {', '.join(flagged)}")

        avoid = list(content.foods_to_avoid)
        avoided_words = [_words(food) for food in avoid]
        for allergy in profile.allergies:
            allergy_words = _words(allergy)
            if not any(allergy_words and allergy_words <= words for words in avoided_words):
                avoid.append(allergy)
        return content.model_copy(update={"foods_to_avoid": avoid})

    async def generate_timetable(self, profile: Profile) -> TimetableContent:
        data = await self._invoke(TIMETABLE, self.timetable_chain, build_timetable_variables(profile))
        try:
            return TimetableContent.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Timetable response for {profile.id} failed validation: {e}")
            raise GenerationError(TIMETABLE, f"response does not match the timetable shape ({e.error_count()} errors)") from e

    async def _invoke(self, kind: str, chain: Runnable, variables: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"Requesting {kind} generation")
        try:
            response = await asyncio.wait_for(chain.ainvoke(variables), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as e:
            logger.error(f"{kind} generation timed out after {self.timeout_seconds}s")
            raise GenerationError(kind, f"timed out after {self.timeout_seconds}s") from e
        except Exception as e:
            logger.error(f"Error generating {kind}: {e}", exc_info=True)
            raise GenerationError(kind, str(e)) from e

        try:
            return extract_json(_response_text(response))
        except ValueError as e:
            logger.warning(f"{kind} response is not valid JSON: {e}")
            raise GenerationError(kind, f"response is not valid JSON: {e}") from e
