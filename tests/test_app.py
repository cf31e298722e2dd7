from sqlalchemy.exc import OperationalError

from band_allocation import database
from band_allocation.services import entries as entries_service
from helpers import allocate


def test_options_returns_cors_headers_only(client):
    res = client.options("/api/entries")
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "*"
    assert "PUT" in res.headers["access-control-allow-methods"]
    assert res.content == b""


def test_browser_preflight(client):
    res = client.options(
        "/api/users",
        headers={"Origin": "https://bands.example.org", "Access-Control-Request-Method": "DELETE"},
    )
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "*"


def test_success_and_error_responses_carry_cors_header(client):
    assert allocate(client, "alice", [1]).headers["access-control-allow-origin"] == "*"

    res = client.delete("/api/entries", params={"id": 12345})
    assert res.status_code == 404
    assert res.headers["access-control-allow-origin"] == "*"

    res = allocate(client, "alice", [])
    assert res.status_code == 400
    assert res.headers["access-control-allow-origin"] == "*"


def test_method_not_allowed(client):
    res = client.patch("/api/entries", json={})
    assert res.status_code == 405
    assert res.json()["success"] is False
    assert res.headers["access-control-allow-origin"] == "*"


def test_malformed_json_is_a_validation_error(client):
    res = client.post("/api/entries", content=b"{not json", headers={"Content-Type": "application/json"})
    assert res.status_code == 400
    assert res.json()["success"] is False


def test_store_failure_returns_raw_message(client, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(entries_service, "list_entries", broken)

    res = client.get("/api/entries", params={"userId": "all"})
    assert res.status_code == 500
    body = res.json()
    assert body["success"] is False
    assert "disk I/O error" in body["error"]
    assert res.headers["access-control-allow-origin"] == "*"


def test_missing_database_url(client, monkeypatch):
    monkeypatch.setattr(database, "_session_factory", None)
    monkeypatch.setattr(database, "_engine", None)
    monkeypatch.setattr(database.settings, "database_url", None)

    res = client.get("/api/users")
    assert res.status_code == 500
    assert "DATABASE_URL" in res.json()["error"]
