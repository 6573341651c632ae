"""Tests for auth router and the error envelope."""

from unittest.mock import patch

from fastapi.testclient import TestClient


def test_current_user_anonymous(client):
    r = client.get("/auth/user")
    assert r.status_code == 200
    assert r.json() == {"success": False, "message": "Not authenticated"}


def test_current_user(client, as_user):
    user = as_user()
    r = client.get("/auth/user")
    assert r.status_code == 200
    data = r.json()
    assert data["success"] is True
    assert data["user"] == {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "profilePicture": user.profile_picture,
        "userType": "user",
    }


def test_logout(client):
    r = client.get("/auth/logout")
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Logged out successfully"}


def test_unknown_route_uses_envelope(client):
    r = client.get("/api/nothing-here")
    assert r.status_code == 404
    assert r.json()["success"] is False


def test_unexpected_error_is_generic_500(client, setup_event):
    app = client.app
    with TestClient(app, raise_server_exceptions=False) as c:
        with patch(
            "app.routers.events_router.EventService.get_events",
            side_effect=RuntimeError("db exploded"),
        ):
            r = c.get("/api/events")
    assert r.status_code == 500
    assert r.json() == {"success": False, "message": "Server error"}


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["success"] is True
