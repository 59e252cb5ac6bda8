# tests/conftest.py
import copy

import pytest

from models.stores import InMemoryPlanStore, InMemoryProfileStore
from schemas.meal_plan import MealPlan
from schemas.timetable import Timetable
from services.errors import GenerationError
from services.plan_orchestrator import PlanOrchestrator
from tests.factories import ASHA_PROFILE, FakeGenerator


@pytest.fixture
def profile_payload():
    return copy.deepcopy(ASHA_PROFILE)


@pytest.fixture
def profile_store():
    return InMemoryProfileStore()


@pytest.fixture
def meal_plan_store():
    return InMemoryPlanStore(MealPlan, "meal plan")


@pytest.fixture
def timetable_store():
    return InMemoryPlanStore(Timetable, "timetable")


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def orchestrator(profile_store, meal_plan_store, timetable_store, generator):
    return PlanOrchestrator(
        profile_store=profile_store,
        meal_plan_store=meal_plan_store,
        timetable_store=timetable_store,
        generator=generator,
    )


@pytest.fixture
def generation_error():
    return GenerationError("meal_plan", "provider unavailable")
