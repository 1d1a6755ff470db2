from fastapi.testclient import TestClient
from jose import jwt

from conftest import identity, register_user
from talenthub.core.config import get_settings


def test_create_user_is_idempotent_on_external_id(client: TestClient):
    first = client.post("/users", json={"external_id": "ext-1", "display_name": "Maya"})
    assert first.status_code == 201, first.text
    second = client.post("/users", json={"external_id": "ext-1", "display_name": "Maya again"})
    assert second.status_code == 200, second.text

    assert second.json()["id"] == first.json()["id"]
    assert second.json()["display_name"] == "Maya"


def test_new_user_starts_at_bronze_with_default_metrics(client: TestClient):
    user = register_user(client, "ext-1", "Maya")
    assert user["role"] == "athlete"
    assert user["points"] == 0
    assert user["badge"] == "Bronze"
    assert user["metrics"] == {"speed": 5.0, "strength": 5.0, "stamina": 5.0, "technique": 5.0}


def test_blank_display_name_is_rejected(client: TestClient):
    response = client.post("/users", json={"external_id": "ext-1", "display_name": "   "})
    assert response.status_code == 422, response.text


def test_me_requires_identity(client: TestClient):
    response = client.get("/users/me")
    assert response.status_code == 401, response.text


def test_me_for_unregistered_identity_is_not_found(client: TestClient):
    response = client.get("/users/me", headers=identity("ghost"))
    assert response.status_code == 404, response.text


def test_update_profile_merges_metrics_and_ignores_points(client: TestClient):
    register_user(client, "ext-1", "Maya")
    response = client.patch(
        "/users/me",
        json={"sport": "Football", "metrics": {"speed": 8.5}, "points": 999, "badge": "Platinum"},
        headers=identity("ext-1"),
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["sport"] == "Football"
    assert body["metrics"]["speed"] == 8.5
    assert body["metrics"]["technique"] == 5.0
    assert body["points"] == 0
    assert body["badge"] == "Bronze"


def test_badge_progress_for_new_user(client: TestClient):
    register_user(client, "ext-1", "Maya")
    response = client.get("/users/me/badge", headers=identity("ext-1"))
    assert response.status_code == 200, response.text
    assert response.json() == {
        "points": 0,
        "badge": "Bronze",
        "progress_percent": 0.0,
        "next_tier": "Silver",
        "points_needed": 50,
    }


def test_identity_token_replaces_header_when_secret_configured(client: TestClient, monkeypatch):
    register_user(client, "ext-1", "Maya")
    settings = get_settings()
    monkeypatch.setattr(settings, "identity_token_secret", "test-secret")

    assert client.get("/users/me", headers=identity("ext-1")).status_code == 401

    token = jwt.encode({"sub": "ext-1"}, "test-secret", algorithm="HS256")
    response = client.get("/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200, response.text
    assert response.json()["external_id"] == "ext-1"

    forged = jwt.encode({"sub": "ext-1"}, "wrong-secret", algorithm="HS256")
    response = client.get("/users/me", headers={"Authorization": f"Bearer {forged}"})
    assert response.status_code == 401, response.text
