"""
HTTP-level tests for the v1 API.

The database dependency is replaced by an in-memory SQLite session, the
fasting service gets a fixed clock and every test gets a fresh exercise
catalog, so the tests never touch the configured database.
"""

import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import fitcycle.db.base  # noqa: F401  (registers the table)
from fitcycle.api.dependencies import get_exercise_repository, get_fasting_service
from fitcycle.catalog.repository import InMemoryExerciseRepository
from fitcycle.db.session import get_db
from fitcycle.main import app
from fitcycle.services.fasting_service import FastingService

NOW = datetime.datetime(2026, 3, 2, 9, 30)


@pytest.fixture
def client():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    repository = InMemoryExerciseRepository()

    def override_db():
        with Session(engine) as session:
            yield session

    def override_fasting():
        with Session(engine) as session:
            yield FastingService(session, clock=lambda: NOW)

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_fasting_service] = override_fasting
    app.dependency_overrides[get_exercise_repository] = lambda: repository
    yield TestClient(app)
    app.dependency_overrides.clear()


# ======================================================================
# Root
# ======================================================================


class TestRoot:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_info(self, client):
        assert client.get("/info").json()["default protocol"] == "16:8"


# ======================================================================
# Fasting
# ======================================================================


class TestFastingEndpoints:
    def test_protocols(self, client):
        body = client.get("/api/v1/fasting/protocols").json()
        assert [p["protocol"] for p in body] == ["12:12", "14:10", "16:8", "18:6", "20:4", "24:0"]

    def test_recommendation(self, client):
        body = client.get("/api/v1/fasting/recommendation", params={"work_type": "sedentary", "weight_kg": 92}).json()
        assert body["protocol"] == "14:10"
        assert body["difficulty"] == "beginner"

    def test_window_serialised_as_clock_strings(self, client):
        body = client.get("/api/v1/fasting/u1/window").json()
        assert body["eating_start"] == "12:00"
        assert body["eating_end"] == "20:00"
        assert body["fasting_start"] == "20:00"
        assert body["fasting_end"] == "12:00"

    def test_status(self, client):
        body = client.get("/api/v1/fasting/u1/status").json()
        assert body["phase"] == "fasting"
        assert body["next_phase_time"] == "12:00"
        assert body["time_remaining"]["total_seconds"] == 150 * 60

    def test_plan_guard(self, client):
        assert client.post("/api/v1/fasting/u1/cycle/start-fasting").json()["applied"] is True
        response = client.put("/api/v1/fasting/u1/plan", json={"protocol": "18:6"})
        assert response.status_code == 409

    def test_plan_update(self, client):
        response = client.put("/api/v1/fasting/u1/plan", json={"protocol": "18:6", "eating_start": "11:00"})
        assert response.status_code == 200
        assert response.json()["eating_end"] == "17:00"

    def test_invalid_time(self, client):
        response = client.put("/api/v1/fasting/u1/plan", json={"protocol": "18:6", "eating_start": "7pm"})
        assert response.status_code == 400

    def test_unknown_action(self, client):
        assert client.post("/api/v1/fasting/u1/cycle/teleport").status_code == 422

    def test_terminal_noop(self, client):
        client.post("/api/v1/fasting/u1/cycle/start-fasting")
        client.post("/api/v1/fasting/u1/cycle/break")
        body = client.post("/api/v1/fasting/u1/cycle/start-fasting").json()
        assert body["applied"] is False
        assert body["cycle"]["state"] == "broken"

    def test_sync(self, client):
        body = client.post("/api/v1/fasting/u1/sync").json()
        assert body["transitions"] == ["initialize_today_cycle"]
        assert client.post("/api/v1/fasting/u1/sync").json()["transitions"] == []
        assert body["cycle"]["state"] == "pending"
        assert body["poll_interval_seconds"] == 60

    def test_history_and_stats(self, client):
        client.post("/api/v1/fasting/u1/cycle/start-fasting")
        client.post("/api/v1/fasting/u1/cycle/break")
        history = client.get("/api/v1/fasting/u1/history").json()
        assert [c["state"] for c in history] == ["broken"]
        assert client.get("/api/v1/fasting/u1/history/2026-03-02").json()["state"] == "broken"
        assert client.get("/api/v1/fasting/u1/history/2026-02-01").status_code == 404
        stats = client.get("/api/v1/fasting/u1/stats").json()
        assert stats["weekly_compliance"] == 0
        assert stats["can_change_plan"] is True

    def test_reset(self, client):
        client.post("/api/v1/fasting/u1/cycle/start-fasting")
        body = client.post("/api/v1/fasting/u1/reset").json()
        assert body["cycle_history"] == {}
        assert body["current_cycle"]["state"] == "pending"


# ======================================================================
# Workouts
# ======================================================================


class TestWorkoutEndpoints:
    def test_daily(self, client):
        response = client.post("/api/v1/workouts/daily", json={"attributes": {"day_number": 4}})
        assert response.status_code == 200
        body = response.json()
        assert body["focus_area"] == "Core & Stability"
        assert len(body["main_exercises"]) == 6

    def test_sequence(self, client):
        body = client.post("/api/v1/workouts/sequence", json={"attributes": {}}).json()
        assert [e["order_index"] for e in body] == list(range(len(body)))

    def test_progression(self, client):
        body = client.post("/api/v1/workouts/progression", json={"attributes": {"day_number": 1}}).json()
        assert body["sets_multiplier"] == 1.0

    def test_meal_targets(self, client):
        response = client.post("/api/v1/workouts/meal-targets", json={
            "attributes": {"day_number": 29, "goal": "build_muscle"},
            "completion_history": [100.0] * 14,
            "base_calories": 2000,
            "base_protein": 100,
        })
        assert response.status_code == 200
        assert response.json()["calories"] == 2475
        assert response.json()["protein"] == 115

    def test_meal_targets_require_base_calories(self, client):
        response = client.post("/api/v1/workouts/meal-targets", json={"attributes": {}, "base_protein": 100})
        assert response.status_code == 422

    def test_can_proceed(self, client):
        body = client.post("/api/v1/workouts/can-proceed", json={"current_index": 2, "completed_indices": [0]}).json()
        assert body == {"can_proceed": False, "missing_indices": [1]}

    def test_recommendations(self, client):
        response = client.get("/api/v1/workouts/recommendations",
                              params={"difficulty": "beginner", "goal": "increase_flexibility", "count": 2})
        assert len(response.json()) == 2


# ======================================================================
# Exercises
# ======================================================================


class TestExerciseEndpoints:
    def test_list_and_get(self, client):
        assert len(client.get("/api/v1/exercises").json()) > 50
        assert client.get("/api/v1/exercises/plank").json()["name"] == "Forearm Plank"
        assert client.get("/api/v1/exercises/nope").status_code == 404

    def test_custom_lifecycle(self, client):
        payload = {"name": "Towel Row", "type": "strength", "muscle_groups": ["back"], "difficulty": "beginner",
                   "base_sets": 3, "base_reps": 12}
        created = client.post("/api/v1/exercises", json=payload)
        assert created.status_code == 201
        exercise_id = created.json()["id"]

        patched = client.patch(f"/api/v1/exercises/{exercise_id}", json={"base_reps": 15})
        assert patched.json()["base_reps"] == 15

        assert client.delete(f"/api/v1/exercises/{exercise_id}").status_code == 204
        assert client.get(f"/api/v1/exercises/{exercise_id}").status_code == 404

    def test_builtin_cannot_be_deleted(self, client):
        assert client.delete("/api/v1/exercises/plank").status_code == 409

    def test_deactivate(self, client):
        body = client.post("/api/v1/exercises/plank/deactivate").json()
        assert body["is_active"] is False
        stats = client.get("/api/v1/exercises/stats").json()
        assert stats["inactive"] == 1
        assert client.post("/api/v1/exercises/plank/reactivate").json()["is_active"] is True
