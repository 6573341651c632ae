from app.client.api_client import ClientRequestError, QueriesClient
from app.client.chat_session import ChatSessionController, ChatState, SendFailedError

__all__ = [
    "ChatSessionController",
    "ChatState",
    "ClientRequestError",
    "QueriesClient",
    "SendFailedError",
]
