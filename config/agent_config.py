"""Agent-specific configuration."""

from typing import Dict, Any

from config.settings import settings

# Model configuration for the two plan generation agents
AGENT_CONFIG: Dict[str, Any] = {
    "meal_plan_agent": {
        "model": settings.openai_model,
        "fallback_model": "claude-3-haiku-20240307",
        "temperature": 0.7,
        "max_tokens": 8192,
        "json_mode": True,
    },
    "timetable_agent": {
        "model": settings.openai_model,
        "fallback_model": "claude-3-haiku-20240307",
        "temperature": 0.5,
        "max_tokens": 8192,
        "json_mode": True,
    },
}
