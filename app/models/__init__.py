from app.models.event import Event
from app.models.query import Query
from app.models.query_message import QueryMessage
from app.models.registration import Registration
from app.models.user import User

__all__ = [
    "Event",
    "Query",
    "QueryMessage",
    "Registration",
    "User",
]
