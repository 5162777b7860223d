import os
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Settings are cached on first import, so point them at a throwaway SQLite file first
_DB_DIR = Path(tempfile.mkdtemp(prefix="fittrack_tests_"))
os.environ["DATABASE_DSN"] = f"sqlite+aiosqlite:///{_DB_DIR / 'test.db'}"
os.environ["AUTO_CREATE_TABLES"] = "true"
os.environ.setdefault("ENVIRONMENT", "test")

from fittrack.db.base import Base  # noqa: E402
from fittrack.db.session import engine  # noqa: E402
from fittrack.main import app  # noqa: E402

API = "/api/v1"
PASSWORD = "secret123"


async def _truncate_tables() -> None:
    async with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            await conn.execute(table.delete())


async def _execute(statement) -> None:
    async with engine.begin() as conn:
        await conn.execute(statement)


def execute(client: TestClient, statement) -> None:
    """Run a statement on the test database outside the API (expire tokens, backdate rows)."""
    client.portal.call(_execute, statement)


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c
        c.portal.call(_truncate_tables)


def register(client: TestClient, email: str = "athlete@example.com", name: str = "Alex") -> dict:
    r = client.post(
        f"{API}/auth/register",
        json={
            "email": email,
            "password": PASSWORD,
            "confirm_password": PASSWORD,
            "display_name": name,
        },
    )
    assert r.status_code == 201, r.text
    return r.json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_headers(client: TestClient) -> dict:
    return bearer(register(client)["access_token"])


@pytest.fixture()
def catalog(client: TestClient, auth_headers: dict) -> dict[str, dict]:
    """A few exercises, keyed by name."""
    docs = [
        {"name": "Bench Press", "equipment": "Barbell", "muscle_groups": ["Chest", "Triceps"]},
        {"name": "Squat", "equipment": "Barbell", "muscle_groups": ["Legs", "Glutes"]},
        {"name": "Push Up", "equipment": "", "muscle_groups": ["Chest"]},
        {"name": "Dumbbell Curl", "equipment": "Dumbbell", "muscle_groups": ["Biceps"]},
        {"name": "Plank", "equipment": "", "muscle_groups": []},
    ]
    created = {}
    for doc in docs:
        r = client.post(f"{API}/exercises", json=doc, headers=auth_headers)
        assert r.status_code == 201, r.text
        created[doc["name"]] = r.json()
    return created


def create_plan(client: TestClient, headers: dict, exercises: list[dict], name: str = "Push Day") -> dict:
    r = client.post(f"{API}/plans", json={"name": name}, headers=headers)
    assert r.status_code == 201, r.text
    plan = r.json()
    if exercises:
        r = client.post(f"{API}/plans/{plan['id']}/exercises", json={"exercises": exercises}, headers=headers)
        assert r.status_code == 201, r.text
        plan = r.json()
    return plan
