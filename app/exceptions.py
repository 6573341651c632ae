"""Application error taxonomy.

Each error carries the HTTP status it maps to; handlers in ``app.main``
render them as ``{"success": false, "message": ...}``.
"""

from __future__ import annotations


class AppError(Exception):
    """Base class for errors that are safe to report to the client."""

    status_code: int = 500
    default_message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(AppError):
    status_code = 401
    default_message = "Not authenticated"


class AuthorizationError(AppError):
    status_code = 403
    default_message = "Manager only"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class CapacityExceededError(AppError):
    """Event has no remaining capacity."""

    status_code = 400
    default_message = "Sorry, this event is full. Registration is closed."


class DuplicateRegistrationError(AppError):
    """An attendee with this email is already registered for the event."""

    status_code = 400
    default_message = "You have already registered for this event"


class UnexpectedError(AppError):
    status_code = 500
    default_message = "Server error"
