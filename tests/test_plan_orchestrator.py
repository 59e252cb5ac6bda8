# tests/test_plan_orchestrator.py
import asyncio
import gc

import pytest

from models.stores import InMemoryPlanStore
from schemas.timetable import Timetable
from services.errors import GenerationError, NotFoundError, ProfileValidationError, StorageError
from services.plan_orchestrator import PlanOrchestrator
from tests.factories import FakeGenerator


async def _create_user(orchestrator, payload):
    profile = await orchestrator.create_profile(payload)
    return profile.id


@pytest.mark.asyncio
async def test_create_profile_assigns_identity(orchestrator, profile_payload):
    profile = await orchestrator.create_profile(profile_payload)
    assert profile.id
    assert await orchestrator.get_profile(profile.id) == profile


@pytest.mark.asyncio
async def test_create_profile_rejects_invalid_data(orchestrator, profile_payload, profile_store):
    profile_payload["age"] = "thirty"
    with pytest.raises(ProfileValidationError) as exc_info:
        await orchestrator.create_profile(profile_payload)
    assert exc_info.value.details
    assert exc_info.value.details[0]["loc"] == ("age",)
    assert profile_store._profiles == {}


@pytest.mark.asyncio
async def test_generate_plan_unknown_user_is_not_found(orchestrator, generator, meal_plan_store, timetable_store):
    with pytest.raises(NotFoundError):
        await orchestrator.generate_plan("no-such-user")

    assert generator.meal_calls == 0
    assert generator.timetable_calls == 0
    assert await meal_plan_store.count("no-such-user") == 0
    assert await timetable_store.count("no-such-user") == 0


@pytest.mark.asyncio
async def test_generate_plan_persists_both_documents(orchestrator, profile_payload, meal_plan_store, timetable_store):
    user_id = await _create_user(orchestrator, profile_payload)

    plan = await orchestrator.generate_plan(user_id)

    assert plan.meal_plan.user_id == user_id
    assert plan.timetable.user_id == user_id
    assert await meal_plan_store.get(user_id) == plan.meal_plan
    assert await timetable_store.get(user_id) == plan.timetable
    assert await orchestrator.get_plan(user_id) == plan


@pytest.mark.asyncio
async def test_generation_calls_run_concurrently(profile_store, meal_plan_store, timetable_store, profile_payload):
    generator = FakeGenerator(meal_delay=0.2, timetable_delay=0.2)
    orchestrator = PlanOrchestrator(profile_store, meal_plan_store, timetable_store, generator)
    user_id = await _create_user(orchestrator, profile_payload)

    loop = asyncio.get_running_loop()
    started = loop.time()
    await orchestrator.generate_plan(user_id)
    assert loop.time() - started < 0.35


@pytest.mark.asyncio
async def test_meal_plan_failure_writes_nothing(profile_store, meal_plan_store, timetable_store, profile_payload, generation_error):
    generator = FakeGenerator(meal_error=generation_error, timetable_delay=0.5)
    orchestrator = PlanOrchestrator(profile_store, meal_plan_store, timetable_store, generator)
    user_id = await _create_user(orchestrator, profile_payload)

    with pytest.raises(GenerationError):
        await orchestrator.generate_plan(user_id)

    assert generator.timetable_cancelled
    assert await meal_plan_store.count(user_id) == 0
    assert await timetable_store.count(user_id) == 0


@pytest.mark.asyncio
async def test_timetable_failure_writes_nothing(profile_store, meal_plan_store, timetable_store, profile_payload):
    generator = FakeGenerator(timetable_error=GenerationError("timetable", "bad json"))
    orchestrator = PlanOrchestrator(profile_store, meal_plan_store, timetable_store, generator)
    user_id = await _create_user(orchestrator, profile_payload)

    with pytest.raises(GenerationError) as exc_info:
        await orchestrator.generate_plan(user_id)

    assert exc_info.value.kind == "timetable"
    assert await meal_plan_store.count(user_id) == 0
    assert await timetable_store.count(user_id) == 0


@pytest.mark.asyncio
async def test_unexpected_generator_error_is_wrapped(profile_store, meal_plan_store, timetable_store, profile_payload):
    generator = FakeGenerator(meal_error=KeyError("boom"))
    orchestrator = PlanOrchestrator(profile_store, meal_plan_store, timetable_store, generator)
    user_id = await _create_user(orchestrator, profile_payload)

    with pytest.raises(GenerationError) as exc_info:
        await orchestrator.generate_plan(user_id)
    assert exc_info.value.kind == "meal_plan"


@pytest.mark.asyncio
async def test_failed_regeneration_keeps_previous_plan(profile_store, meal_plan_store, timetable_store, profile_payload):
    generator = FakeGenerator()
    orchestrator = PlanOrchestrator(profile_store, meal_plan_store, timetable_store, generator)
    user_id = await _create_user(orchestrator, profile_payload)
    previous = await orchestrator.generate_plan(user_id)

    generator.timetable_error = GenerationError("timetable", "timed out")
    with pytest.raises(GenerationError):
        await orchestrator.generate_plan(user_id)

    assert await meal_plan_store.get(user_id) == previous.meal_plan
    assert await timetable_store.get(user_id) == previous.timetable


@pytest.mark.asyncio
async def test_regeneration_replaces_content_in_place(orchestrator, profile_payload, meal_plan_store, timetable_store):
    user_id = await _create_user(orchestrator, profile_payload)

    first = await orchestrator.generate_plan(user_id)
    second = await orchestrator.generate_plan(user_id)

    assert second.meal_plan.breakfast != first.meal_plan.breakfast
    assert second.meal_plan.id == first.meal_plan.id
    assert second.meal_plan.created_at == first.meal_plan.created_at
    assert second.timetable.id == first.timetable.id
    assert second.timetable.created_at == first.timetable.created_at
    assert await meal_plan_store.count(user_id) == 1
    assert await timetable_store.count(user_id) == 1


@pytest.mark.asyncio
async def test_concurrent_generation_for_one_user_keeps_pairs_consistent(
    profile_store, meal_plan_store, timetable_store, profile_payload
):
    generator = FakeGenerator(meal_delay=0.02, timetable_delay=0.05)
    orchestrator = PlanOrchestrator(profile_store, meal_plan_store, timetable_store, generator)
    user_id = await _create_user(orchestrator, profile_payload)

    await asyncio.gather(*[orchestrator.generate_plan(user_id) for _ in range(3)])

    meal_plan = await meal_plan_store.get(user_id)
    timetable = await timetable_store.get(user_id)
    meal_tag = meal_plan.breakfast.items[0].name.rsplit("#", 1)[1]
    timetable_tag = timetable.sleep_schedule.sleep_time.rsplit("#", 1)[1]
    assert meal_tag == timetable_tag == "3"


@pytest.mark.asyncio
async def test_missing_documents_are_not_found(orchestrator, profile_payload):
    user_id = await _create_user(orchestrator, profile_payload)
    with pytest.raises(NotFoundError):
        await orchestrator.get_meal_plan(user_id)
    with pytest.raises(NotFoundError):
        await orchestrator.get_timetable(user_id)
    with pytest.raises(NotFoundError):
        await orchestrator.get_plan(user_id)


class BrokenPlanStore(InMemoryPlanStore):
    async def upsert(self, user_id, content):
        raise StorageError(f"Failed to save {self.kind}: connection reset")


@pytest.mark.asyncio
async def test_storage_failure_propagates(profile_store, meal_plan_store, profile_payload):
    timetables = BrokenPlanStore(Timetable, "timetable")
    orchestrator = PlanOrchestrator(profile_store, meal_plan_store, timetables, FakeGenerator())
    user_id = await _create_user(orchestrator, profile_payload)

    with pytest.raises(StorageError):
        await orchestrator.generate_plan(user_id)


@pytest.mark.asyncio
async def test_user_locks_are_released_after_generation(orchestrator, profile_payload):
    user_id = await _create_user(orchestrator, profile_payload)

    await orchestrator.generate_plan(user_id)
    gc.collect()

    assert user_id not in orchestrator._user_locks
