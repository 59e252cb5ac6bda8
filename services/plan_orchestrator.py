"""Plan orchestration: profile -> meal plan + timetable -> plan stores."""

import asyncio
import weakref
from typing import Any, Dict, Tuple

from pydantic import ValidationError

from models.stores import PlanStore, ProfileStore
from schemas.api import GeneratedPlan
from schemas.meal_plan import MealPlan, MealPlanContent
from schemas.profile import Profile, ProfileCreate
from schemas.timetable import Timetable, TimetableContent
from services.content_generator import ContentGenerator
from services.errors import GenerationError, NotFoundError, ProfileValidationError
from utils.logger import setup_logger

logger = setup_logger(__name__)


class PlanOrchestrator:
    """Coordinates profile lookup, concurrent generation and persistence.

    A plan is the pair (MealPlan, Timetable). Generation is all-or-nothing:
    either both documents are written for the user or neither is.
    """

    def __init__(
        self,
        profile_store: ProfileStore,
        meal_plan_store: PlanStore[MealPlan],
        timetable_store: PlanStore[Timetable],
        generator: ContentGenerator,
        serialize_per_user: bool = True,
    ):
        self.profile_store = profile_store
        self.meal_plan_store = meal_plan_store
        self.timetable_store = timetable_store
        self.generator = generator
        self.serialize_per_user = serialize_per_user
        self._user_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    async def create_profile(self, payload: Dict[str, Any]) -> Profile:
        """Validate onboarding data and store it as a new profile."""
        try:
            profile = ProfileCreate.model_validate(payload)
        except ValidationError as e:
            raise ProfileValidationError(
                "Invalid profile data",
                details=e.errors(include_url=False, include_context=False),
            ) from e
        return await self.profile_store.put(profile)

    async def get_profile(self, user_id: str) -> Profile:
        profile = await self.profile_store.get(user_id)
        if profile is None:
            raise NotFoundError("Profile not found")
        return profile

    async def get_meal_plan(self, user_id: str) -> MealPlan:
        meal_plan = await self.meal_plan_store.get(user_id)
        if meal_plan is None:
            raise NotFoundError("Meal plan not found")
        return meal_plan

    async def get_timetable(self, user_id: str) -> Timetable:
        timetable = await self.timetable_store.get(user_id)
        if timetable is None:
            raise NotFoundError("Timetable not found")
        return timetable

    async def get_plan(self, user_id: str) -> GeneratedPlan:
        return GeneratedPlan(
            meal_plan=await self.get_meal_plan(user_id),
            timetable=await self.get_timetable(user_id),
        )

    async def generate_plan(self, user_id: str) -> GeneratedPlan:
        """Generate and persist a fresh meal plan and timetable for a user.

        Raises:
            NotFoundError: no profile exists; nothing is generated or written.
            GenerationError: either generation call failed; nothing is written.
            StorageError: a store write failed.
        """
        profile = await self.get_profile(user_id)

        if not self.serialize_per_user:
            return await self._generate_and_store(profile)

        # Entries drop out once no request holds or awaits the lock
        lock = self._user_locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._user_locks[user_id] = lock
        async with lock:
            return await self._generate_and_store(profile)

    async def _generate_and_store(self, profile: Profile) -> GeneratedPlan:
        meal_plan_content, timetable_content = await self._generate_both(profile)

        meal_plan = await self.meal_plan_store.upsert(profile.id, meal_plan_content)
        timetable = await self.timetable_store.upsert(profile.id, timetable_content)

        logger.info(f"Generated plan for user {profile.id}: meal plan {meal_plan.id}, timetable {timetable.id}")
        return GeneratedPlan(meal_plan=meal_plan, timetable=timetable)

    async def _generate_both(self, profile: Profile) -> Tuple[MealPlanContent, TimetableContent]:
        """Run both generation calls concurrently; the first failure cancels the other."""
        meal_task = asyncio.create_task(self.generator.generate_meal_plan(profile))
        timetable_task = asyncio.create_task(self.generator.generate_timetable(profile))
        tasks = [meal_task, timetable_task]

        try:
            done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            raise

        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        failures = [
            (task, task.exception())
            for task in tasks
            if task.done() and not task.cancelled() and task.exception() is not None
        ]
        if failures:
            task, error = failures[0]
            logger.error(f"Plan generation for user {profile.id} failed: {error}")
            if isinstance(error, GenerationError):
                raise error
            kind = "meal_plan" if task is meal_task else "timetable"
            raise GenerationError(kind, str(error)) from error

        return meal_task.result(), timetable_task.result()
