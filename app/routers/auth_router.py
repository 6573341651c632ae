"""Auth API: current user and logout. Sign-in itself happens at the OAuth provider."""

from __future__ import annotations

from typing import Optional, Union

from fastapi import APIRouter, Depends, Request

from app.auth.identity import clear_session, get_current_user
from app.models.user import User
from app.schemas.common import ErrorResponse, MessageEnvelope
from app.schemas.user import CurrentUserResponse, UserRead

auth_router = APIRouter(prefix="/auth", tags=["auth"])


@auth_router.get("/user", response_model=Union[CurrentUserResponse, ErrorResponse])
def current_user(
    user: Optional[User] = Depends(get_current_user),
) -> Union[CurrentUserResponse, ErrorResponse]:
    if user is None:
        return ErrorResponse(message="Not authenticated")
    return CurrentUserResponse(user=UserRead.model_validate(user))


@auth_router.get("/logout", response_model=MessageEnvelope)
def logout(request: Request) -> MessageEnvelope:
    clear_session(request)
    return MessageEnvelope(message="Logged out successfully")
