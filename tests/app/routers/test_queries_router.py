"""Tests for queries router."""

from uuid import uuid4

from app.services.query_service import QueryService


def test_list_queries_anonymous_unfiltered_is_401(client):
    r = client.get("/api/queries")
    assert r.status_code == 401
    assert r.json() == {"success": False, "message": "Not authenticated"}


def test_list_queries_user_sees_own(client, as_user, setup_query, setup_other_user, db):
    QueryService(db).create_query(setup_query.event_id, user_id=setup_other_user.id)
    as_user()
    r = client.get("/api/queries")
    assert r.status_code == 200
    data = r.json()
    assert data["success"] is True
    assert [q["id"] for q in data["queries"]] == [str(setup_query.id)]


def test_list_queries_manager_sees_all(client, as_manager, setup_query, setup_other_user, db):
    QueryService(db).create_query(setup_query.event_id, user_id=setup_other_user.id)
    as_manager()
    r = client.get("/api/queries")
    assert r.status_code == 200
    assert len(r.json()["queries"]) == 2


def test_list_queries_filtered_without_auth(client, setup_query):
    r = client.get("/api/queries", params={"eventId": str(setup_query.event_id)})
    assert r.status_code == 200
    query = r.json()["queries"][0]
    assert query["eventId"] == str(setup_query.event_id)
    assert query["userId"] == str(setup_query.user_id)
    assert query["status"] == "open"
    assert query["messages"][0]["sender"] == "user"
    assert "createdAt" in query and "updatedAt" in query


def test_create_query_requires_auth(client, setup_event):
    r = client.post("/api/queries", json={"eventId": str(setup_event.id)})
    assert r.status_code == 401


def test_create_query_requires_event_id(client, as_user):
    as_user()
    r = client.post("/api/queries", json={"initialMessage": "hi"})
    assert r.status_code == 400
    assert r.json()["message"] == "eventId is required"


def test_create_query_unknown_event(client, as_user):
    as_user()
    r = client.post("/api/queries", json={"eventId": str(uuid4()), "initialMessage": "hi"})
    assert r.status_code == 404
    assert r.json()["success"] is False


def test_get_query(client, setup_query):
    r = client.get(f"/api/queries/{setup_query.id}")
    assert r.status_code == 200
    assert r.json()["query"]["id"] == str(setup_query.id)


def test_get_query_not_found(client):
    for query_id in (uuid4(), "not-an-id"):
        r = client.get(f"/api/queries/{query_id}")
        assert r.status_code == 404
        assert r.json() == {"success": False, "message": "Query not found"}


def test_post_message_requires_auth(client, setup_query):
    r = client.post(f"/api/queries/{setup_query.id}/messages", json={"text": "hi"})
    assert r.status_code == 401


def test_post_message_blank_text(client, as_user, setup_query):
    as_user()
    r = client.post(f"/api/queries/{setup_query.id}/messages", json={"text": "   "})
    assert r.status_code == 400
    assert r.json()["message"] == "Message text required"


def test_post_message_unknown_query(client, as_user):
    as_user()
    r = client.post(f"/api/queries/{uuid4()}/messages", json={"text": "hi"})
    assert r.status_code == 404


def test_post_message_sender_override(client, as_manager, setup_query):
    as_manager()
    r = client.post(
        f"/api/queries/{setup_query.id}/messages",
        json={"text": "posted for the attendee", "sender": "user"},
    )
    assert r.status_code == 200
    assert r.json()["message"]["sender"] == "user"

    r = client.post(
        f"/api/queries/{setup_query.id}/messages",
        json={"text": "from the desk", "sender": "bot"},
    )
    assert r.json()["message"]["sender"] == "manager"


def test_manager_all_access(client, as_user, as_manager, as_anonymous, setup_query):
    as_anonymous()
    assert client.get("/api/queries/manager/all").status_code == 401
    as_user()
    r = client.get("/api/queries/manager/all")
    assert r.status_code == 403
    assert r.json() == {"success": False, "message": "Manager only"}
    as_manager()
    r = client.get("/api/queries/manager/all")
    assert r.status_code == 200
    assert len(r.json()["queries"]) == 1


def test_update_status(client, as_user, as_manager, setup_query):
    as_user()
    assert (
        client.patch(f"/api/queries/{setup_query.id}/status", json={"status": "closed"}).status_code
        == 403
    )
    as_manager()
    r = client.patch(f"/api/queries/{setup_query.id}/status", json={"status": "closed"})
    assert r.status_code == 200
    assert r.json()["query"]["status"] == "closed"
    r = client.patch(f"/api/queries/{setup_query.id}/status", json={"status": "nope"})
    assert r.status_code == 400


def test_resolve_route(client, as_user, setup_event):
    as_user()
    body = {"eventId": str(setup_event.id), "eventName": setup_event.event_name}
    first = client.post("/api/queries/resolve", json=body)
    second = client.post("/api/queries/resolve", json=body)
    assert first.status_code == 200
    assert first.json()["created"] is True
    assert first.json()["query"]["messages"] == []
    assert second.json()["created"] is False
    assert second.json()["query"]["id"] == first.json()["query"]["id"]


def test_ask_then_reply_end_to_end(client, as_user, as_manager, setup_event):
    """Ask, ask again on the same event, manager replies: one thread, ordered."""
    as_user()
    body = {
        "eventId": str(setup_event.id),
        "eventName": setup_event.event_name,
        "initialMessage": "Is lunch included?",
    }
    r = client.post("/api/queries", json=body)
    assert r.status_code == 201
    created = r.json()["query"]
    assert len(created["messages"]) == 1
    assert created["messages"][0]["sender"] == "user"

    r = client.post("/api/queries/resolve", json={"eventId": str(setup_event.id)})
    assert r.json()["query"]["id"] == created["id"]

    as_manager()
    r = client.post(f"/api/queries/{created['id']}/messages", json={"text": "Yes, it is."})
    assert r.status_code == 200

    r = client.get(f"/api/queries/{created['id']}")
    messages = r.json()["query"]["messages"]
    assert [m["sender"] for m in messages] == ["user", "manager"]
    assert [m["text"] for m in messages] == ["Is lunch included?", "Yes, it is."]


def test_ask_again_reuses_thread(client, as_user, setup_event):
    as_user()
    body = {"eventId": str(setup_event.id), "initialMessage": "First"}
    first = client.post("/api/queries", json=body)
    body["initialMessage"] = "Second"
    second = client.post("/api/queries", json=body)
    assert first.status_code == 201
    assert second.status_code == 201
    assert first.json()["created"] is True
    assert second.json()["created"] is False
    assert second.json()["query"]["id"] == first.json()["query"]["id"]
    assert [m["text"] for m in second.json()["query"]["messages"]] == ["First", "Second"]
