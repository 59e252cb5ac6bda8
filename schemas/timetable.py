"""Timetable collection schema."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field, field_validator

from .base import CamelModel


class TimeBlock(CamelModel):
    """A timed activity; reused for water, exercise and meditation schedules."""
    time: str
    duration: str
    activity: str

    @field_validator("duration", mode="before")
    @classmethod
    def coerce_duration(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class SleepSchedule(CamelModel):
    sleep_time: str
    wake_time: str
    total_hours: float = Field(..., ge=0, le=24)


class WorkBlock(CamelModel):
    start_time: str
    end_time: str
    type: str = Field(..., description="Kind of work, e.g. 'focused work'")


class WorkSchedule(CamelModel):
    blocks: List[WorkBlock]
    total_hours: float = Field(..., ge=0, le=24)


class MealTimings(CamelModel):
    breakfast: str
    lunch: str
    dinner: str
    snacks: Optional[List[str]] = None


class TimetableContent(CamelModel):
    """Generated daily timetable content, independent of storage identity.

    Exercise and meditation schedules are only expected when the profile has
    physical or spiritual goals respectively, so both may be null.
    """
    sleep_schedule: SleepSchedule
    work_schedule: WorkSchedule
    meal_timings: MealTimings
    water_schedule: List[TimeBlock]
    exercise_schedule: Optional[List[TimeBlock]] = None
    meditation_schedule: Optional[List[TimeBlock]] = None


class Timetable(TimetableContent):
    """Stored timetable; one live document per user."""
    id: str = Field(..., description="Timetable identifier")
    user_id: str = Field(..., description="Owning profile identifier")
    created_at: datetime = Field(..., description="Creation time of the first generation")
