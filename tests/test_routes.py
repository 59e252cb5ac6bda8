# tests/test_routes.py
import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from models.stores import InMemoryPlanStore, InMemoryProfileStore
from schemas.meal_plan import MealPlan
from schemas.timetable import Timetable
from services.errors import GenerationError, StorageError
from services.plan_orchestrator import PlanOrchestrator
from tests.factories import FakeGenerator


@pytest.fixture
def route_generator():
    return FakeGenerator()


@pytest.fixture
def client(route_generator):
    orchestrator = PlanOrchestrator(
        profile_store=InMemoryProfileStore(),
        meal_plan_store=InMemoryPlanStore(MealPlan, "meal plan"),
        timetable_store=InMemoryPlanStore(Timetable, "timetable"),
        generator=route_generator,
    )
    with TestClient(create_app(orchestrator)) as test_client:
        yield test_client


def _create_profile(client, payload):
    response = client.post("/api/profile", json=payload)
    assert response.status_code == 200
    return response.json()["id"]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_create_and_fetch_profile(client, profile_payload):
    user_id = _create_profile(client, profile_payload)

    response = client.get(f"/api/profile/{user_id}")
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == user_id
    assert body["name"] == "Asha"
    assert body["physicalActivityLevel"] == "moderate"
    assert body["allergies"] == ["peanuts"]


def test_create_profile_with_invalid_data_returns_400(client, profile_payload):
    del profile_payload["name"]
    profile_payload["height"] = 5

    response = client.post("/api/profile", json=profile_payload)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid profile data"
    assert {tuple(d["loc"]) for d in body["details"]} == {("name",), ("height",)}


def test_unknown_profile_returns_404(client):
    response = client.get("/api/profile/missing")
    assert response.status_code == 404
    assert response.json() == {"error": "Profile not found"}


def test_plan_documents_missing_before_generation(client, profile_payload):
    user_id = _create_profile(client, profile_payload)
    assert client.get(f"/api/meal-plan/{user_id}").json() == {"error": "Meal plan not found"}
    assert client.get(f"/api/timetable/{user_id}").status_code == 404
    assert client.get(f"/api/plan/{user_id}").status_code == 404


def test_generate_plan_requires_user_id(client):
    response = client.post("/api/generate-plan", json={})
    assert response.status_code == 400
    assert response.json() == {"error": "User ID is required"}


def test_generate_plan_for_unknown_user_returns_404(client, route_generator):
    response = client.post("/api/generate-plan", json={"userId": "missing"})
    assert response.status_code == 404
    assert route_generator.meal_calls == 0


def test_generate_plan_then_fetch(client, profile_payload):
    user_id = _create_profile(client, profile_payload)

    response = client.post("/api/generate-plan", json={"userId": user_id})
    assert response.status_code == 200
    plan = response.json()
    assert plan["mealPlan"]["userId"] == user_id
    assert plan["mealPlan"]["waterIntake"]["totalLiters"] == 2.5
    assert plan["mealPlan"]["breakfast"]["items"]
    assert plan["timetable"]["sleepSchedule"]["totalHours"] == 8
    assert plan["timetable"]["meditationSchedule"] is None

    meal_plan = client.get(f"/api/meal-plan/{user_id}").json()
    timetable = client.get(f"/api/timetable/{user_id}").json()
    assert meal_plan == plan["mealPlan"]
    assert timetable == plan["timetable"]
    assert client.get(f"/api/plan/{user_id}").json() == plan


def test_regenerate_keeps_document_identity(client, profile_payload):
    user_id = _create_profile(client, profile_payload)
    first = client.post("/api/generate-plan", json={"userId": user_id}).json()
    second = client.post("/api/generate-plan", json={"userId": user_id}).json()

    assert second["mealPlan"]["id"] == first["mealPlan"]["id"]
    assert second["mealPlan"]["createdAt"] == first["mealPlan"]["createdAt"]
    assert second["mealPlan"]["breakfast"] != first["mealPlan"]["breakfast"]


def test_generation_failure_returns_502_without_partial_data(client, route_generator, profile_payload):
    user_id = _create_profile(client, profile_payload)
    route_generator.timetable_error = GenerationError("timetable", "provider error")

    response = client.post("/api/generate-plan", json={"userId": user_id})

    assert response.status_code == 502
    assert response.json() == {"error": "Failed to generate plan"}
    assert client.get(f"/api/meal-plan/{user_id}").status_code == 404
    assert client.get(f"/api/timetable/{user_id}").status_code == 404


@pytest.mark.parametrize("body", [[1, 2], "Asha", 42])
def test_non_object_profile_body_returns_400(client, body):
    response = client.post("/api/profile", json=body)

    assert response.status_code == 400
    payload = response.json()
    assert payload["error"] == "Invalid profile data"
    assert payload["details"]


def test_malformed_json_returns_400(client):
    response = client.post(
        "/api/profile",
        content=b'{"name": "Asha",',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid profile data"


def test_generate_plan_with_non_string_user_id_returns_400(client, route_generator):
    response = client.post("/api/generate-plan", json={"userId": 123})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"
    assert route_generator.meal_calls == 0


def test_storage_failure_returns_500(route_generator, profile_payload):
    class BrokenMealPlanStore(InMemoryPlanStore):
        async def upsert(self, user_id, content):
            raise StorageError("Failed to save meal plan: connection reset")

    orchestrator = PlanOrchestrator(
        profile_store=InMemoryProfileStore(),
        meal_plan_store=BrokenMealPlanStore(MealPlan, "meal plan"),
        timetable_store=InMemoryPlanStore(Timetable, "timetable"),
        generator=route_generator,
    )
    with TestClient(create_app(orchestrator)) as client:
        user_id = _create_profile(client, profile_payload)
        response = client.post("/api/generate-plan", json={"userId": user_id})

    assert response.status_code == 500
    assert response.json() == {"error": "Storage unavailable"}


def test_unexpected_error_returns_json_500(route_generator):
    class FailingProfileStore(InMemoryProfileStore):
        async def get(self, profile_id):
            raise RuntimeError("corrupt record")

    orchestrator = PlanOrchestrator(
        profile_store=FailingProfileStore(),
        meal_plan_store=InMemoryPlanStore(MealPlan, "meal plan"),
        timetable_store=InMemoryPlanStore(Timetable, "timetable"),
        generator=route_generator,
    )
    with TestClient(create_app(orchestrator), raise_server_exceptions=False) as client:
        response = client.get("/api/profile/user-1")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
