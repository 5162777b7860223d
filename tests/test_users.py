from datetime import timedelta

from fastapi.testclient import TestClient
from sqlalchemy import update

from conftest import API, PASSWORD, bearer, create_plan, execute, register
from fittrack.core.timeutils import utcnow
from fittrack.models import WorkoutSession


def test_update_profile(client: TestClient, auth_headers: dict):
    r = client.patch(
        f"{API}/users/me",
        json={
            "display_name": "Alex K",
            "height_cm": 180,
            "weight_kg": 77.5,
            "fitness_level": "intermediate",
            "fitness_goals": ["Build Muscle", "Improve Strength", "Build Muscle"],
        },
        headers=auth_headers,
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["display_name"] == "Alex K"
    assert body["height_cm"] == 180
    assert body["fitness_level"] == "intermediate"
    assert body["fitness_goals"] == ["Build Muscle", "Improve Strength"]


def test_update_profile_validation(client: TestClient, auth_headers: dict):
    for payload in ({"height_cm": 0}, {"weight_kg": -3}, {"display_name": " "}, {"fitness_goals": ["Fly"]}):
        r = client.patch(f"{API}/users/me", json=payload, headers=auth_headers)
        assert r.status_code == 422, payload


def test_update_settings(client: TestClient, auth_headers: dict):
    r = client.patch(
        f"{API}/users/me/settings",
        json={"notifications_enabled": False, "unit_system": "imperial"},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json()["notifications_enabled"] is False
    assert r.json()["unit_system"] == "imperial"


def test_change_password_keeps_current_token(client: TestClient):
    token = register(client)["access_token"]
    other = client.post(f"{API}/auth/login", json={"email": "athlete@example.com", "password": PASSWORD})
    other_token = other.json()["access_token"]

    wrong = client.post(
        f"{API}/users/me/password",
        json={"current_password": "bad-pass", "new_password": "newpass1", "confirm_password": "newpass1"},
        headers=bearer(token),
    )
    assert wrong.status_code == 400
    assert wrong.json()["detail"] == "Current password is incorrect."

    mismatch = client.post(
        f"{API}/users/me/password",
        json={"current_password": PASSWORD, "new_password": "newpass1", "confirm_password": "newpass2"},
        headers=bearer(token),
    )
    assert mismatch.status_code == 422

    r = client.post(
        f"{API}/users/me/password",
        json={"current_password": PASSWORD, "new_password": "newpass1", "confirm_password": "newpass1"},
        headers=bearer(token),
    )
    assert r.status_code == 204
    assert client.get(f"{API}/users/me", headers=bearer(token)).status_code == 200
    assert client.get(f"{API}/users/me", headers=bearer(other_token)).status_code == 401


def test_delete_account_removes_data(client: TestClient, catalog: dict):
    token = register(client, email="leaving@example.com")["access_token"]
    headers = bearer(token)
    plan = create_plan(client, headers, [{"exercise_id": catalog["Squat"]["id"]}])

    r = client.request("DELETE", f"{API}/users/me", json={"password": "wrong-one"}, headers=headers)
    assert r.status_code == 400

    r = client.request("DELETE", f"{API}/users/me", json={"password": PASSWORD}, headers=headers)
    assert r.status_code == 204
    assert client.get(f"{API}/plans/{plan['id']}", headers=headers).status_code == 401
    r = client.post(f"{API}/auth/login", json={"email": "leaving@example.com", "password": PASSWORD})
    assert r.status_code == 401


def test_stats_empty(client: TestClient, auth_headers: dict):
    r = client.get(f"{API}/users/me/stats", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {
        "total_workouts": 0,
        "current_streak": 0,
        "longest_streak": 0,
        "last_workout_date": None,
        "completion_rate": 0.0,
    }


def test_stats_after_workout(client: TestClient, auth_headers: dict, catalog: dict):
    plan = create_plan(
        client,
        auth_headers,
        [
            {"exercise_id": catalog["Squat"]["id"], "sets": 1},
            {"exercise_id": catalog["Plank"]["id"], "sets": 1},
        ],
    )
    session = client.post(f"{API}/sessions", json={"workout_plan_id": plan["id"]}, headers=auth_headers).json()
    client.post(
        f"{API}/sessions/{session['id']}/sets",
        json={"exercise_index": 0, "set_index": 0, "actual_reps": 5, "actual_weight": 100, "rating": 3},
        headers=auth_headers,
    )
    client.post(f"{API}/sessions/{session['id']}/finish", json={}, headers=auth_headers)

    stats = client.get(f"{API}/users/me/stats", headers=auth_headers).json()
    assert stats["total_workouts"] == 1
    assert stats["current_streak"] == 1
    assert stats["longest_streak"] == 1
    assert stats["last_workout_date"] is not None
    assert stats["completion_rate"] == 50.0


def test_stats_include_workouts_older_than_a_year(client: TestClient, auth_headers: dict, catalog: dict):
    plan = create_plan(client, auth_headers, [{"exercise_id": catalog["Squat"]["id"], "sets": 1}])
    session = client.post(f"{API}/sessions", json={"workout_plan_id": plan["id"]}, headers=auth_headers).json()
    client.post(f"{API}/sessions/{session['id']}/finish", json={}, headers=auth_headers)
    long_ago = utcnow() - timedelta(days=500)
    execute(client, update(WorkoutSession).values(finished_at=long_ago))

    stats = client.get(f"{API}/users/me/stats", headers=auth_headers).json()
    assert stats["total_workouts"] == 1
    assert stats["current_streak"] == 0
    assert stats["longest_streak"] == 1
    assert stats["last_workout_date"] == long_ago.date().isoformat()
