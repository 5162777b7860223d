from fastapi.testclient import TestClient

from conftest import API, create_plan


def _run_session(client, headers, plan, weight, reps=8, rating=3):
    sid = client.post(f"{API}/sessions", json={"workout_plan_id": plan["id"]}, headers=headers).json()["id"]
    client.post(
        f"{API}/sessions/{sid}/sets",
        json={"exercise_index": 0, "set_index": 0, "actual_reps": reps, "actual_weight": weight, "rating": rating},
        headers=headers,
    )
    client.post(f"{API}/sessions/{sid}/finish", json={}, headers=headers)
    return sid


def test_progress_summary_and_detail(client: TestClient, auth_headers: dict, catalog: dict):
    squat_id = catalog["Squat"]["id"]
    plan = create_plan(
        client,
        auth_headers,
        [{"exercise_id": squat_id, "sets": 1}, {"exercise_id": catalog["Plank"]["id"], "sets": 1}],
    )
    _run_session(client, auth_headers, plan, weight=80, reps=8)
    _run_session(client, auth_headers, plan, weight=100, reps=10)

    r = client.get(f"{API}/progress", headers=auth_headers)
    assert r.status_code == 200
    summary = r.json()
    # Plank never completed, so it has no data points
    assert len(summary) == 1
    assert summary[0]["exercise_name"] == "Squat"
    assert summary[0]["data_points"] == 2
    assert summary[0]["progress_percent"] == 25.0
    assert summary[0]["current_weight"] == 100.0

    r = client.get(f"{API}/progress/exercises/{squat_id}", headers=auth_headers)
    assert r.status_code == 200
    detail = r.json()
    assert [p["weight"] for p in detail["points"]] == [80.0, 100.0]
    assert detail["weight_change"] == 20.0
    assert detail["weight_change_percent"] == 25.0
    assert detail["reps_change"] == 2.0


def test_progress_without_data(client: TestClient, auth_headers: dict, catalog: dict):
    assert client.get(f"{API}/progress", headers=auth_headers).json() == []
    r = client.get(f"{API}/progress/exercises/{catalog['Squat']['id']}", headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "No data available for this exercise"
