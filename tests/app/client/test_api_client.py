"""Tests for QueriesClient."""

import json

import httpx
import pytest

from app.client.api_client import ClientRequestError, QueriesClient


def _client(handler):
    http = httpx.AsyncClient(base_url="http://testserver", transport=httpx.MockTransport(handler))
    return QueriesClient(http_client=http), http


@pytest.mark.asyncio
async def test_create_query_sends_camel_case_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"success": True, "query": {"id": "q1", "messages": []}})

    client, http = _client(handler)
    query = await client.create_query("e1", "Launch", initial_message="hi")
    await http.aclose()

    assert query["id"] == "q1"
    assert seen["method"] == "POST"
    assert seen["path"] == "/api/queries"
    assert seen["body"] == {"eventId": "e1", "eventName": "Launch", "initialMessage": "hi"}


@pytest.mark.asyncio
async def test_append_message_and_resolve():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/messages"):
            body = json.loads(request.content)
            return httpx.Response(
                200,
                json={"success": True, "message": {"id": 7, "sender": body["sender"], "text": body["text"]}},
            )
        return httpx.Response(200, json={"success": True, "query": {"id": "q1"}, "created": True})

    client, http = _client(handler)
    message = await client.append_message("q1", "hello", sender="manager")
    query, created = await client.resolve_query("e1")
    await http.aclose()

    assert message == {"id": 7, "sender": "manager", "text": "hello"}
    assert query == {"id": "q1"}
    assert created is True


@pytest.mark.asyncio
async def test_error_envelope_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"success": False, "message": "Query not found"})

    client, http = _client(handler)
    with pytest.raises(ClientRequestError) as exc_info:
        await client.get_query("missing")
    await http.aclose()

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Query not found"


@pytest.mark.asyncio
async def test_transport_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client, http = _client(handler)
    with pytest.raises(ClientRequestError) as exc_info:
        await client.list_queries(event_id="e1")
    await http.aclose()

    assert exc_info.value.status_code is None
