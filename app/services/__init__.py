from app.services.event_service import EventService
from app.services.query_manager import QueryManager
from app.services.query_message_service import QueryMessageService
from app.services.query_service import QueryService
from app.services.registration_service import RegistrationService
from app.services.user_service import UserService

__all__ = [
    "EventService",
    "QueryManager",
    "QueryMessageService",
    "QueryService",
    "RegistrationService",
    "UserService",
]
