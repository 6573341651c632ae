"""
Identity resolver.

The OAuth provider signs the user in and hands us the profile; we keep only
the user id in a signed session cookie. Every request resolves that id to a
``RequestContext`` through the dependencies below.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.request_context import RequestContext
from app.db import get_db
from app.exceptions import AuthenticationError, AuthorizationError
from app.infra.logging_config import get_logger
from app.models.user import User
from app.services.user_service import UserService

logger = get_logger("auth")

SESSION_USER_KEY = "user_id"


def establish_session(
    request: Request,
    db: Session,
    user: User,
    user_type: Optional[str] = None,
) -> RequestContext:
    """Sign ``user`` in. A role chosen at login is persisted on the user."""
    if user_type:
        UserService(db).set_user_type(user, user_type)
    request.session[SESSION_USER_KEY] = str(user.id)
    logger.info("Session established for user %s as %s", user.id, user.user_type)
    return RequestContext.from_user(user)


def clear_session(request: Request) -> None:
    request.session.clear()


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Load the signed-in user, or None when the session carries no valid id."""
    raw_id = request.session.get(SESSION_USER_KEY)
    if not raw_id:
        return None
    try:
        user_id = UUID(str(raw_id))
    except ValueError:
        logger.warning("Discarding session with malformed user id")
        request.session.pop(SESSION_USER_KEY, None)
        return None
    return UserService(db).get_user(user_id)


def resolve_identity(request: Request, db: Session) -> Optional[RequestContext]:
    """Resolve the caller outside of dependency injection (middleware, scripts)."""
    user = get_current_user(request, db)
    if user is None:
        return None
    return RequestContext.from_user(user)


def get_request_context(
    user: Optional[User] = Depends(get_current_user),
) -> Optional[RequestContext]:
    if user is None:
        return None
    return RequestContext.from_user(user)


def require_user(
    ctx: Optional[RequestContext] = Depends(get_request_context),
) -> RequestContext:
    if ctx is None:
        raise AuthenticationError()
    return ctx


def require_manager(ctx: RequestContext = Depends(require_user)) -> RequestContext:
    if not ctx.is_manager:
        raise AuthorizationError()
    return ctx
