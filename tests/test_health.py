from fastapi.testclient import TestClient

from conftest import API


def test_root_and_liveness(client: TestClient):
    assert client.get("/").json()["status"] == "ok"
    body = client.get(f"{API}/health").json()
    assert body["status"] == "ok"
    assert body["app"] == "FitTrack API"


def test_readiness_reports_database(client: TestClient):
    r = client.get(f"{API}/health/ready")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "database": "sqlite", "users": 0}
