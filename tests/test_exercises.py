from fastapi.testclient import TestClient

from conftest import API, create_plan


def _names(r) -> list[str]:
    assert r.status_code == 200, r.text
    return [e["name"] for e in r.json()]


def test_list_is_public_and_ordered_by_name(client: TestClient, catalog: dict):
    names = _names(client.get(f"{API}/exercises"))
    assert names == sorted(names)
    assert len(names) == 5


def test_search_matches_name_equipment_and_muscles(client: TestClient, catalog: dict):
    assert _names(client.get(f"{API}/exercises", params={"search": "BENCH"})) == ["Bench Press"]
    assert set(_names(client.get(f"{API}/exercises", params={"search": "barbell"}))) == {"Bench Press", "Squat"}
    assert set(_names(client.get(f"{API}/exercises", params={"search": "chest"}))) == {"Bench Press", "Push Up"}


def test_category_filter(client: TestClient, catalog: dict):
    with_equipment = _names(client.get(f"{API}/exercises", params={"category": "equipment"}))
    assert set(with_equipment) == {"Bench Press", "Squat", "Dumbbell Curl"}
    with_muscles = _names(client.get(f"{API}/exercises", params={"category": "muscle"}))
    assert "Plank" not in with_muscles and len(with_muscles) == 4


def test_muscle_and_equipment_filters_and_sort(client: TestClient, catalog: dict):
    r = client.get(
        f"{API}/exercises",
        params=[("muscle_groups", "Chest"), ("muscle_groups", "Biceps"), ("sort", "z-a")],
    )
    assert _names(r) == ["Push Up", "Dumbbell Curl", "Bench Press"]
    r = client.get(f"{API}/exercises", params=[("equipment", "Barbell"), ("sort", "a-z")])
    assert _names(r) == ["Bench Press", "Squat"]


def test_pagination(client: TestClient, catalog: dict):
    assert _names(client.get(f"{API}/exercises", params={"skip": 1, "limit": 2})) == ["Dumbbell Curl", "Plank"]


def test_exclude_plan_hides_planned_exercises(client: TestClient, auth_headers: dict, catalog: dict):
    plan = create_plan(client, auth_headers, [{"exercise_id": catalog["Squat"]["id"]}])
    r = client.get(f"{API}/exercises", params={"exclude_plan_id": plan["id"]}, headers=auth_headers)
    assert "Squat" not in _names(r)
    assert client.get(f"{API}/exercises", params={"exclude_plan_id": plan["id"]}).status_code == 401


def test_filter_options(client: TestClient, catalog: dict):
    r = client.get(f"{API}/exercises/filters")
    assert r.status_code == 200
    assert r.json() == {
        "muscle_groups": ["Biceps", "Chest", "Glutes", "Legs", "Triceps"],
        "equipment": ["Barbell", "Dumbbell"],
    }


def test_filter_options_defaults_when_catalog_empty(client: TestClient):
    body = client.get(f"{API}/exercises/filters").json()
    assert body["muscle_groups"][0] == "Chest"
    assert "Resistance Band" in body["equipment"]


def test_crud(client: TestClient, auth_headers: dict, catalog: dict):
    bench = catalog["Bench Press"]
    r = client.get(f"{API}/exercises/{bench['id']}")
    assert r.status_code == 200 and r.json()["muscle_groups"] == ["Chest", "Triceps"]

    r = client.patch(
        f"{API}/exercises/{bench['id']}",
        json={"instructions": {"1": "Lie on the bench", "2": "Press"}},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json()["instructions"]["2"] == "Press"

    dup = client.patch(f"{API}/exercises/{bench['id']}", json={"name": "Squat"}, headers=auth_headers)
    assert dup.status_code == 409
    dup = client.post(f"{API}/exercises", json={"name": "Squat"}, headers=auth_headers)
    assert dup.status_code == 409

    assert client.post(f"{API}/exercises", json={"name": "Anon"}).status_code == 401

    assert client.delete(f"{API}/exercises/{bench['id']}", headers=auth_headers).status_code == 204
    assert client.get(f"{API}/exercises/{bench['id']}").status_code == 404


def test_import_upserts_by_name(client: TestClient, tmp_path):
    import json

    from fittrack.db.session import async_session_maker
    from fittrack.services.exercise_catalog import import_exercises, load_documents

    path = tmp_path / "exercises.json"
    path.write_text(
        json.dumps(
            [
                {"name": "Deadlift", "equipment": "Barbell", "muscleGroups": {"0": "Back", "1": "Legs"}},
                {"id": "lunge", "muscleGroups": "Legs", "instructions": "Step forward"},
                {"equipment": "Cable"},
            ]
        )
    )

    async def run(documents):
        async with async_session_maker() as db:
            counts = await import_exercises(db, documents)
            await db.commit()
            return counts

    assert client.portal.call(run, load_documents(path)) == (2, 0)
    assert client.portal.call(run, [{"name": "Deadlift", "equipment": "Trap Bar"}]) == (0, 1)

    by_name = {e["name"]: e for e in client.get(f"{API}/exercises").json()}
    assert by_name["Deadlift"]["equipment"] == "Trap Bar"
    assert by_name["lunge"]["muscle_groups"] == ["Legs"]
    assert by_name["lunge"]["instructions"] == {"text": "Step forward"}
