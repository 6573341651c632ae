"""
HTTP client for the queries API.

Used by chat front-ends (and the chat session controller) to read and write
query threads. The session cookie travels with the underlying
``httpx.AsyncClient``.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from app.config import get_settings
from app.infra.logging_config import get_logger

logger = get_logger("client")


class ClientRequestError(Exception):
    """A request failed in transport, with a non-2xx status, or with ``success: false``."""

    def __init__(self, status_code: Optional[int], message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}" if status_code else message)


class QueriesClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        cookies: Optional[dict[str, str]] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize client.

        Args:
            base_url: API base URL, defaults to ``API_BASE_URL``
            timeout: Request timeout in seconds
            cookies: Cookies to send, typically the signed session cookie
            http_client: Pre-built client; the caller keeps ownership of it
        """
        self.base_url = base_url or get_settings().api_base_url
        self.timeout = timeout
        self._cookies = cookies
        self._client = http_client
        self._owns_client = http_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                cookies=self._cookies,
                headers={"Content-Type": "application/json"},
            )
            self._owns_client = True
        return self._client

    async def _request(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        client = await self._get_client()
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Error calling %s %s: %s", method, path, exc)
            raise ClientRequestError(None, str(exc) or exc.__class__.__name__) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if response.is_error or payload.get("success") is False:
            message = payload.get("message") or response.reason_phrase or "Request failed"
            raise ClientRequestError(response.status_code, message)
        return payload

    # ===========================================
    # Queries
    # ===========================================

    async def get_query(self, query_id: str) -> dict[str, Any]:
        payload = await self._request("GET", f"/api/queries/{query_id}")
        return payload["query"]

    async def list_queries(
        self,
        event_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        params = {}
        if event_id:
            params["eventId"] = event_id
        if user_id:
            params["userId"] = user_id
        payload = await self._request("GET", "/api/queries", params=params)
        return payload.get("queries", [])

    async def create_query(
        self,
        event_id: str,
        event_name: Optional[str] = None,
        initial_message: Optional[str] = None,
    ) -> dict[str, Any]:
        """Ask about an event; the server reuses the caller's thread if one exists."""
        payload = await self._request(
            "POST",
            "/api/queries",
            json={
                "eventId": event_id,
                "eventName": event_name,
                "initialMessage": initial_message,
            },
        )
        return payload["query"]

    async def resolve_query(
        self, event_id: str, event_name: Optional[str] = None
    ) -> tuple[dict[str, Any], bool]:
        payload = await self._request(
            "POST",
            "/api/queries/resolve",
            json={"eventId": event_id, "eventName": event_name},
        )
        return payload["query"], bool(payload.get("created"))

    async def append_message(
        self, query_id: str, text: str, sender: Optional[str] = None
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"text": text}
        if sender:
            body["sender"] = sender
        payload = await self._request(
            "POST", f"/api/queries/{query_id}/messages", json=body
        )
        return payload["message"]

    async def close(self) -> None:
        if self._owns_client and self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "QueriesClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
