"""Prompts for the plan generation agents."""

from prompts.meal_plan_prompt import MEAL_PLAN_AGENT_PROMPT
from prompts.timetable_prompt import TIMETABLE_AGENT_PROMPT

__all__ = [
    "MEAL_PLAN_AGENT_PROMPT",
    "TIMETABLE_AGENT_PROMPT",
]
