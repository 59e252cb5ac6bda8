"""Error types raised by the planner services."""

from typing import Any, Dict, List, Optional


class PlannerError(Exception):
    """Base class for planner errors."""


class NotFoundError(PlannerError):
    """A profile, meal plan or timetable does not exist for the given id."""


class ProfileValidationError(PlannerError):
    """Submitted profile data failed field or shape checks."""

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.details = details or []


class GenerationError(PlannerError):
    """A generation call failed: provider error, timeout or unusable response."""

    def __init__(self, kind: str, message: str):
        super().__init__(f"{kind} generation failed: {message}")
        self.kind = kind


class StorageError(PlannerError):
    """The persistence backend could not complete a read or write."""
