from fastapi.testclient import TestClient

from conftest import API, bearer, create_plan, register


def test_create_and_list_plans(client: TestClient, auth_headers: dict, catalog: dict):
    first = create_plan(client, auth_headers, [], name="Legs")
    second = create_plan(client, auth_headers, [{"exercise_id": catalog["Squat"]["id"]}], name="Full Body")
    assert first["exercises"] == []

    r = client.get(f"{API}/plans", headers=auth_headers)
    assert r.status_code == 200
    plans = r.json()
    assert [p["id"] for p in plans] == [second["id"], first["id"]]
    assert plans[0]["exercise_count"] == 1


def test_plan_name_required(client: TestClient, auth_headers: dict):
    r = client.post(f"{API}/plans", json={"name": "   "}, headers=auth_headers)
    assert r.status_code == 422


def test_add_exercises_uses_defaults(client: TestClient, auth_headers: dict, catalog: dict):
    plan = create_plan(
        client,
        auth_headers,
        [
            {"exercise_id": catalog["Bench Press"]["id"]},
            {"exercise_id": catalog["Push Up"]["id"], "sets": 4, "reps": "15", "weight_unit": "lb"},
        ],
    )
    bench, push = plan["exercises"]
    assert bench["exercise_name"] == "Bench Press"
    assert (bench["sets"], bench["reps"], bench["rest_seconds"], bench["weight"], bench["weight_unit"]) == (
        3,
        "10-12",
        60,
        0.0,
        "kg",
    )
    assert (push["position"], push["sets"], push["reps"], push["weight_unit"]) == (1, 4, "15", "lb")


def test_add_exercise_rejections(client: TestClient, auth_headers: dict, catalog: dict):
    squat = catalog["Squat"]["id"]
    plan = create_plan(client, auth_headers, [{"exercise_id": squat}])
    url = f"{API}/plans/{plan['id']}/exercises"

    r = client.post(url, json={"exercises": [{"exercise_id": squat}]}, headers=auth_headers)
    assert r.status_code == 400
    bench = catalog["Bench Press"]["id"]
    r = client.post(url, json={"exercises": [{"exercise_id": bench}, {"exercise_id": bench}]}, headers=auth_headers)
    assert r.status_code == 400
    r = client.post(
        url, json={"exercises": [{"exercise_id": "00000000-0000-0000-0000-000000000000"}]}, headers=auth_headers
    )
    assert r.status_code == 404
    r = client.post(url, json={"exercises": [{"exercise_id": bench, "sets": 0}]}, headers=auth_headers)
    assert r.status_code == 422
    r = client.post(url, json={"exercises": [{"exercise_id": bench, "reps": "  "}]}, headers=auth_headers)
    assert r.status_code == 422


def test_update_remove_and_reorder(client: TestClient, auth_headers: dict, catalog: dict):
    plan = create_plan(
        client,
        auth_headers,
        [{"exercise_id": catalog[name]["id"]} for name in ("Bench Press", "Squat", "Plank")],
    )
    base = f"{API}/plans/{plan['id']}/exercises"
    bench, squat, plank = plan["exercises"]

    r = client.patch(f"{base}/{squat['id']}", json={"weight": 80, "notes": "belt"}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["exercises"][1]["weight"] == 80
    assert r.json()["exercises"][1]["notes"] == "belt"

    r = client.delete(f"{base}/{bench['id']}", headers=auth_headers)
    assert r.status_code == 200
    remaining = r.json()["exercises"]
    assert [(e["exercise_name"], e["position"]) for e in remaining] == [("Squat", 0), ("Plank", 1)]

    bad = client.put(f"{base}/order", json={"plan_exercise_ids": [plank["id"]]}, headers=auth_headers)
    assert bad.status_code == 400
    r = client.put(f"{base}/order", json={"plan_exercise_ids": [plank["id"], squat["id"]]}, headers=auth_headers)
    assert r.status_code == 200
    assert [e["exercise_name"] for e in r.json()["exercises"]] == ["Plank", "Squat"]


def test_update_and_delete_plan(client: TestClient, auth_headers: dict, catalog: dict):
    plan = create_plan(client, auth_headers, [{"exercise_id": catalog["Squat"]["id"]}])
    r = client.patch(f"{API}/plans/{plan['id']}", json={"description": "Heavy"}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["description"] == "Heavy"
    assert r.json()["name"] == "Push Day"

    assert client.delete(f"{API}/plans/{plan['id']}", headers=auth_headers).status_code == 204
    assert client.get(f"{API}/plans/{plan['id']}", headers=auth_headers).status_code == 404


def test_plans_are_private(client: TestClient, auth_headers: dict, catalog: dict):
    plan = create_plan(client, auth_headers, [{"exercise_id": catalog["Squat"]["id"]}])
    stranger = bearer(register(client, email="stranger@example.com")["access_token"])
    assert client.get(f"{API}/plans/{plan['id']}", headers=stranger).status_code == 404
    assert client.delete(f"{API}/plans/{plan['id']}", headers=stranger).status_code == 404
    assert client.get(f"{API}/plans", headers=stranger).json() == []
