"""
Tests for the HTTP endpoints
"""
import pytest
from fastapi.testclient import TestClient

from dayzero.core import dependencies
from main import app


@pytest.fixture
def client(profiles, habit_service, log_service, entitlements, coach):
    app.dependency_overrides[dependencies.get_profile_service] = lambda: profiles
    app.dependency_overrides[dependencies.get_habit_service] = lambda: habit_service
    app.dependency_overrides[dependencies.get_log_service] = lambda: log_service
    app.dependency_overrides[dependencies.get_entitlement_service] = lambda: entitlements
    app.dependency_overrides[dependencies.get_coach_service] = lambda: coach
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok", "message": "Server is alive"}


def test_create_and_list_with_metrics(client):
    response = client.post("/habits", json={"title": "Meditate", "target_per_week": 2, "target_times": ["07:00"]})
    assert response.status_code == 200
    habit_id = response.json()["data"]["id"]

    assert client.post(f"/habits/{habit_id}/logs", json={"mood": "great", "date": "2024-01-02"}).status_code == 200
    assert client.post(f"/habits/{habit_id}/logs", json={"mood": "ok"}).status_code == 200

    body = client.get("/habits").json()
    assert body["date"] == "2024-01-03"
    [summary] = body["habits"]
    assert summary["habit"]["id"] == habit_id
    assert summary["streak"] == 2
    assert summary["week_count"] == 2
    assert summary["week_pct"] == 1.0
    assert summary["logged_today"] is True


def test_free_plan_allows_one_habit(client, entitlements):
    assert client.post("/habits", json={"title": "One"}).status_code == 200
    assert client.post("/habits", json={"title": "Two"}).status_code == 403
    entitlements.set_plan("premium")
    assert client.post("/habits", json={"title": "Two"}).status_code == 200


def test_create_validation_errors(client):
    assert client.post("/habits", json={"title": "Run", "target_times": ["7am"]}).status_code == 422
    assert client.post("/habits", json={"title": "   "}).status_code == 400


def test_update_and_delete(client):
    habit_id = client.post("/habits", json={"title": "Read"}).json()["data"]["id"]
    response = client.patch(f"/habits/{habit_id}", json={"target_per_week": 9})
    assert response.json()["data"]["target_per_week"] == 7
    assert client.patch(f"/habits/{habit_id}", json={"created_day_id": "2020-01-01"}).status_code == 422
    assert client.patch("/habits/missing", json={"title": "x"}).status_code == 404
    assert client.delete(f"/habits/{habit_id}").status_code == 200
    assert client.delete(f"/habits/{habit_id}").status_code == 200
    assert client.get(f"/habits/{habit_id}").status_code == 404


def test_quick_log_refuses_second_log_today(client):
    habit_id = client.post("/habits", json={"title": "Water"}).json()["data"]["id"]
    assert client.post(f"/habits/{habit_id}/logs?quick=true", json={"mood": "ok"}).status_code == 200
    assert client.post(f"/habits/{habit_id}/logs?quick=true", json={"mood": "ok"}).status_code == 409
    assert client.post(f"/habits/{habit_id}/logs", json={"note": "again"}).status_code == 200


def test_log_for_unknown_habit(client):
    assert client.post("/habits/ghost/logs", json={"mood": "ok"}).status_code == 404


def test_query_logs(client):
    habit_id = client.post("/habits", json={"title": "Walk"}).json()["data"]["id"]
    client.post(f"/habits/{habit_id}/logs", json={"mood": "hard", "date": "2024-01-01"})
    client.post(f"/habits/{habit_id}/logs", json={"mood": "skip", "date": "2024-01-02"})
    body = client.get("/logs", params={"habit_id": habit_id, "start": "2024-01-02"}).json()
    assert body["count"] == 1
    assert body["logs"][0]["mood"] == "skip"
    assert client.get("/logs", params={"start": "nope"}).status_code == 400
    days = client.get("/logs/days").json()["days"]
    assert days == {"2024-01-01": {habit_id: "yes"}, "2024-01-02": {habit_id: "no"}}


def test_coach_quota_and_ask(client):
    assert client.get("/coach/quota").json()["remaining"] == 1
    body = client.post("/coach/ask", json={"prompt": "How do I keep going?"}).json()
    assert body["answered"] is True
    again = client.post("/coach/ask", json={"prompt": "And tomorrow?"}).json()
    assert again["answered"] is False
    assert client.get("/coach/quota").json()["allowed"] is False


def test_profile_update(client):
    assert client.get("/profile").json()["data"]["timezone"] == "UTC"
    assert client.patch("/profile", json={"timezone": "Asia/Tokyo"}).json()["data"]["timezone"] == "Asia/Tokyo"
    assert client.patch("/profile", json={"timezone": "Not/AZone"}).status_code == 400
