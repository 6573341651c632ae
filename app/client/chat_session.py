"""
Chat session controller.

Keeps a local copy of one query thread in sync with the server while a chat
window is open, and submits new messages. The local list is replaced by every
successful poll; a message confirmed by a send is appended immediately and the
next poll reconciles it.
"""

from __future__ import annotations

import asyncio
import contextlib
import enum
from typing import Any, Optional

from app.client.api_client import ClientRequestError, QueriesClient
from app.config import get_settings
from app.infra.logging_config import get_logger

logger = get_logger("chat")


class ChatState(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    SYNCED = "synced"
    SENDING = "sending"
    CLOSED = "closed"


class SendFailedError(Exception):
    """The server did not confirm a message; nothing was added locally."""


class ChatSessionController:
    def __init__(
        self,
        client: QueriesClient,
        event_id: str,
        event_name: Optional[str] = None,
        query_id: Optional[str] = None,
        is_manager: bool = False,
        poll_interval: Optional[float] = None,
    ) -> None:
        self.client = client
        self.event_id = event_id
        self.event_name = event_name
        self.query_id = query_id
        self.is_manager = is_manager
        self.poll_interval = (
            poll_interval
            if poll_interval is not None
            else get_settings().query_poll_interval_seconds
        )
        self.state = ChatState.IDLE
        self.messages: list[dict[str, Any]] = []
        self._generation = 0
        self._poll_task: Optional[asyncio.Task] = None

    @property
    def sender(self) -> str:
        return "manager" if self.is_manager else "user"

    @property
    def is_polling(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    async def open(self) -> None:
        """Load the thread if one is known and start polling it."""
        if self.state is ChatState.CLOSED:
            raise RuntimeError("Chat session is closed")
        if self.query_id is None:
            self.state = ChatState.IDLE
            return
        self.state = ChatState.LOADING
        await self.refresh()
        self._start_polling()

    async def refresh(self) -> bool:
        """
        Re-fetch the thread and replace the local messages.

        Returns False when there is nothing to fetch, the fetch failed, or a
        send completed while the fetch was in flight. None of these change
        the state.
        """
        if self.query_id is None or self.state is ChatState.CLOSED:
            return False
        generation = self._generation
        try:
            query = await self.client.get_query(self.query_id)
        except ClientRequestError as exc:
            logger.warning("Failed to refresh query %s: %s", self.query_id, exc)
            return False
        if generation != self._generation or self.state is ChatState.CLOSED:
            logger.debug("Discarding stale refresh of query %s", self.query_id)
            return False
        self.messages = list(query.get("messages") or [])
        if self.state is ChatState.LOADING:
            self.state = ChatState.SYNCED
        return True

    async def send(self, text: Optional[str]) -> Optional[dict[str, Any]]:
        """
        Submit a message and return it as confirmed by the server.

        Whitespace-only text is ignored. The first message of a new chat
        creates the thread.
        """
        if self.state is ChatState.CLOSED:
            raise RuntimeError("Chat session is closed")
        body = (text or "").strip()
        if not body:
            return None

        previous = self.state
        self.state = ChatState.SENDING
        self._generation += 1
        try:
            if self.query_id is None:
                query = await self.client.create_query(
                    self.event_id, self.event_name, initial_message=body
                )
                self.query_id = str(query["id"])
                self.messages = list(query.get("messages") or [])
                message = self.messages[-1] if self.messages else None
            else:
                message = await self.client.append_message(
                    self.query_id, body, sender=self.sender
                )
                self.messages.append(message)
        except ClientRequestError as exc:
            if self.state is not ChatState.CLOSED:
                self.state = previous
            logger.error("Failed to send message for event %s: %s", self.event_id, exc)
            raise SendFailedError(exc.message) from exc
        finally:
            self._generation += 1

        if self.state is ChatState.CLOSED:
            return message
        self.state = ChatState.SYNCED
        self._start_polling()
        return message

    async def close(self) -> None:
        """Stop polling. Safe to call more than once."""
        self.state = ChatState.CLOSED
        task, self._poll_task = self._poll_task, None
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def __aenter__(self) -> "ChatSessionController":
        await self.open()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _start_polling(self) -> None:
        if self.query_id is None or self.is_polling or self.state is ChatState.CLOSED:
            return
        self._poll_task = asyncio.create_task(self._run_polling())

    async def _run_polling(self) -> None:
        while self.state is not ChatState.CLOSED:
            await asyncio.sleep(self.poll_interval)
            await self.refresh()
